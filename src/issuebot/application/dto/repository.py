"""DTOs for repository management."""

from __future__ import annotations

from dataclasses import dataclass

from issuebot.domain.registration import Registration
from issuebot.errors import UpstreamStatus


@dataclass(frozen=True)
class RepositoryCheck:
    """Outcome of re-verifying a stored credential."""

    registration: Registration
    failure: UpstreamStatus | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


__all__ = ["RepositoryCheck"]
