"""Issue wizard session management."""

from __future__ import annotations

import logging
from itertools import count
from threading import Lock

from issuebot.application.ports.session_registry import SessionRegistryPort
from issuebot.domain.session import IssueSession
from issuebot.errors import InvalidArgumentError, NotFoundError

logger = logging.getLogger("issuebot.sessions")


class WizardSessionManager:
    """Issues tokens for wizard sessions and keeps their latest snapshot.

    Tokens come from a counter that lives as long as the manager, so a token is
    never reissued within a process. Sessions are not persisted; a restart
    drops every in-flight wizard.
    """

    def __init__(self, sessions: SessionRegistryPort) -> None:
        self._sessions = sessions
        self._counter = count(1)
        self._counter_lock = Lock()

    def create(self, session: IssueSession) -> str:
        """Store the initial session under a fresh token and return the token."""
        token = self._next_token()
        self._sessions.put(token, session)
        logger.debug(
            "session created",
            extra={"data": {"token": token, "requester_id": session.requester_id}},
        )
        return token

    def load(self, token: str) -> IssueSession:
        """Return the session stored under ``token`` or raise ``NotFoundError``."""
        session = self._sessions.get(token)
        if session is None:
            raise NotFoundError(f"session {token!r} not found")
        return session

    def store(self, token: str, session: IssueSession) -> None:
        """Replace the session stored under ``token``."""
        if not token:
            raise InvalidArgumentError("session token must not be empty")
        self._sessions.put(token, session)

    def delete(self, token: str) -> None:
        """Remove the session once the wizard is finished."""
        self._sessions.delete(token)
        logger.debug("session deleted", extra={"data": {"token": token}})

    def _next_token(self) -> str:
        with self._counter_lock:
            return str(next(self._counter))


__all__ = ["WizardSessionManager"]
