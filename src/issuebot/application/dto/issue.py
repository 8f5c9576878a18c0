"""DTOs for the issue wizard use case."""

from __future__ import annotations

from dataclasses import dataclass

from issuebot.domain.registration import Registration


@dataclass(frozen=True)
class WizardStarted:
    """Result of starting a wizard: its token and the repositories to choose from."""

    token: str
    registrations: tuple[Registration, ...]


@dataclass(frozen=True)
class FiledIssue:
    """Result of a successful submission."""

    url: str
    title: str
    registration: Registration


__all__ = ["FiledIssue", "WizardStarted"]
