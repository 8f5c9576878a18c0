"""Port describing wizard session state access."""

from __future__ import annotations

from typing import Protocol

from issuebot.domain.session import IssueSession


class SessionRegistryPort(Protocol):
    """Keyed storage for in-flight wizard sessions."""

    def get(self, token: str) -> IssueSession | None:
        """Return the session stored under ``token``."""

    def put(self, token: str, session: IssueSession) -> None:
        """Store or replace the session under ``token``."""

    def delete(self, token: str) -> None:
        """Remove the session, if present."""


__all__ = ["SessionRegistryPort"]
