"""In-memory wizard session registry."""

from __future__ import annotations

from threading import Lock

from issuebot.application.ports.session_registry import SessionRegistryPort
from issuebot.domain.session import IssueSession


class InMemorySessionRegistry(SessionRegistryPort):
    """Wizard session snapshots keyed by the token embedded in component custom ids.

    Entries live until deleted or until the process exits; abandoned wizards
    are never expired.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, IssueSession] = {}
        self._lock = Lock()

    def get(self, token: str) -> IssueSession | None:
        with self._lock:
            return self._sessions.get(token)

    def put(self, token: str, session: IssueSession) -> None:
        """Insert or replace the snapshot for ``token``; the last writer wins."""
        with self._lock:
            self._sessions[token] = session

    def delete(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["InMemorySessionRegistry"]
