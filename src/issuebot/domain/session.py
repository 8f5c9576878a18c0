"""Wizard session state for filing an issue from a chat message."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum

from issuebot.errors import InvalidArgumentError


class IssueKind(StrEnum):
    """Kind of issue being filed."""

    BUG = "bug"
    FEATURE = "feature"
    GENERIC = "generic"

    @property
    def display(self) -> str:
        return _KIND_DISPLAY[self]

    def labels(self) -> list[str]:
        return list(_KIND_LABELS[self])


_KIND_DISPLAY: dict[IssueKind, str] = {
    IssueKind.BUG: "bug report",
    IssueKind.FEATURE: "feature request",
    IssueKind.GENERIC: "issue",
}

_KIND_LABELS: dict[IssueKind, tuple[str, ...]] = {
    IssueKind.BUG: ("bug",),
    IssueKind.FEATURE: ("enhancement",),
    IssueKind.GENERIC: (),
}


class WizardStep(StrEnum):
    """Lifecycle states of an issue wizard."""

    CREATED = "created"
    REPO_SELECTED = "repo_selected"
    COMPLETED = "completed"


@dataclass(frozen=True, slots=True)
class ChannelContext:
    """Where the source message lives; ``guild_id`` is empty for DMs."""

    channel_id: str
    guild_id: str = ""


@dataclass(frozen=True, slots=True)
class SourceMessage:
    """The chat message an issue is being filed about."""

    message_id: str
    content: str
    author_id: str
    author_name: str
    timestamp: datetime | None = None


@dataclass(frozen=True, slots=True)
class IssueSession:
    """In-progress state of one issue wizard."""

    requester_id: str
    channel: ChannelContext
    source_message: SourceMessage
    issue_kind: IssueKind = IssueKind.GENERIC
    selected_registration_id: int | None = None
    title: str | None = None
    step: WizardStep = WizardStep.CREATED

    def __post_init__(self) -> None:
        if not self.requester_id:
            raise InvalidArgumentError("requester_id must not be empty")

    def select_registration(self, registration_id: int) -> IssueSession:
        """Record the chosen registration; the selection cannot be changed later."""
        if registration_id <= 0:
            raise InvalidArgumentError("registration id must be positive")
        if self.step is WizardStep.COMPLETED:
            raise InvalidArgumentError("session already completed")
        if self.selected_registration_id is not None:
            if self.selected_registration_id != registration_id:
                raise InvalidArgumentError("a repository has already been selected")
            return self
        return replace(
            self,
            selected_registration_id=registration_id,
            step=WizardStep.REPO_SELECTED,
        )

    def with_title(self, title: str) -> IssueSession:
        title = title.strip()
        if not title:
            raise InvalidArgumentError("title must not be empty")
        return replace(self, title=title)

    def submission(self) -> tuple[int, str]:
        """Return the selected registration id and title needed to file the issue."""
        if self.selected_registration_id is None:
            raise InvalidArgumentError("no repository selected")
        if not self.title:
            raise InvalidArgumentError("no title provided")
        return self.selected_registration_id, self.title

    def complete(self) -> IssueSession:
        self.submission()
        return replace(self, step=WizardStep.COMPLETED)

    @property
    def message_url(self) -> str:
        guild = self.channel.guild_id or "@me"
        return (
            f"https://discord.com/channels/{guild}/{self.channel.channel_id}"
            f"/{self.source_message.message_id}"
        )

    def issue_body(self) -> str:
        quoted = "\n".join(f"> {line}" for line in self.source_message.content.splitlines()) or ">"
        return (
            f"{quoted}\n\n"
            f"*Originally posted by **{self.source_message.author_name}** "
            f"on [Discord]({self.message_url})*"
        )

    def labels(self) -> list[str]:
        return self.issue_kind.labels()


__all__ = [
    "ChannelContext",
    "IssueKind",
    "IssueSession",
    "SourceMessage",
    "WizardStep",
]
