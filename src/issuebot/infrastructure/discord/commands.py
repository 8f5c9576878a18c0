"""Application command catalogue and its registration with Discord."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from issuebot.domain.session import IssueKind

logger = logging.getLogger("issuebot.discord")

CMD_MANAGE = "issuebot"
CMD_CREATE_BUG = "Create bug report"
CMD_CREATE_FEATURE = "Create feature request"
CMD_CREATE_ISSUE = "Create issue"

# name -> issue kind for the message context-menu commands
ISSUE_COMMANDS: dict[str, IssueKind] = {
    CMD_CREATE_BUG: IssueKind.BUG,
    CMD_CREATE_FEATURE: IssueKind.FEATURE,
    CMD_CREATE_ISSUE: IssueKind.GENERIC,
}

_CHAT_INPUT = 1
_MESSAGE = 3
_USER_INSTALL = 1
_CONTEXTS = [0, 1, 2]  # guild, bot DM, private channel


def _command(name: str, command_type: int, description: str = "") -> dict[str, Any]:
    command: dict[str, Any] = {
        "name": name,
        "type": command_type,
        "integration_types": [_USER_INSTALL],
        "contexts": list(_CONTEXTS),
    }
    if description:
        command["description"] = description
    return command


def application_commands() -> list[dict[str, Any]]:
    """Return the command definitions the bot registers globally."""
    return [
        _command(CMD_MANAGE, _CHAT_INPUT, "Manage repositories"),
        *(_command(name, _MESSAGE) for name in ISSUE_COMMANDS),
    ]


class CommandApi(Protocol):
    def list_commands(self) -> list[dict[str, Any]]:
        ...

    def create_command(self, command: dict[str, Any]) -> dict[str, Any]:
        ...

    def delete_command(self, command_id: str) -> None:
        ...


class DiscordCommandRegistrar:
    """Creates the global commands, optionally deleting existing ones first."""

    def __init__(self, api: CommandApi) -> None:
        self._api = api

    def sync(self, *, reset: bool = False) -> list[str]:
        """Register commands when none exist or when ``reset`` is set.

        Returns the names of the commands created.
        """
        existing = self._api.list_commands()
        if existing and reset:
            for command in existing:
                self._api.delete_command(str(command["id"]))
                logger.info("deleted application command", extra={"data": {"cmd": command.get("name")}})
        created: list[str] = []
        if not existing or reset:
            for command in application_commands():
                self._api.create_command(command)
                created.append(command["name"])
                logger.info("created application command", extra={"data": {"cmd": command["name"]}})
        return created


__all__ = [
    "CMD_CREATE_BUG",
    "CMD_CREATE_FEATURE",
    "CMD_CREATE_ISSUE",
    "CMD_MANAGE",
    "DiscordCommandRegistrar",
    "ISSUE_COMMANDS",
    "application_commands",
]
