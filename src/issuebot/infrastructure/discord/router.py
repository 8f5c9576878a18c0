"""Dispatch of inbound Discord interactions to the issuebot use cases."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from issuebot.application.file_issue import IssueWizard
from issuebot.application.manage_repositories import RepositoryService
from issuebot.domain.session import ChannelContext, IssueKind, SourceMessage
from issuebot.errors import InvalidArgumentError, NotFoundError, StorageFailureError, UpstreamFailureError
from issuebot.infrastructure.discord import components as ui
from issuebot.infrastructure.discord import messages
from issuebot.infrastructure.discord.commands import CMD_MANAGE, ISSUE_COMMANDS

logger = logging.getLogger("issuebot.discord")

# inbound interaction types
PING = 1
APPLICATION_COMMAND = 2
MESSAGE_COMPONENT = 3
MODAL_SUBMIT = 5


class InteractionError(Exception):
    """Raised for interactions the router cannot interpret."""


class FollowupApi(Protocol):
    def create_followup(self, interaction_token: str, message: dict[str, Any]) -> None:
        ...

    def edit_original(self, interaction_token: str, message: dict[str, Any]) -> None:
        ...


@dataclass(frozen=True)
class InteractionReply:
    """Immediate callback response plus optional work to finish after it is sent."""

    response: dict[str, Any]
    followup: Callable[[], None] | None = None


class InteractionRouter:
    """Turns interaction payloads into use-case calls and rendered responses."""

    def __init__(
        self,
        *,
        wizard: IssueWizard,
        repositories: RepositoryService,
        followups: FollowupApi,
    ) -> None:
        self._wizard = wizard
        self._repositories = repositories
        self._followups = followups

    def handle(self, interaction: dict[str, Any]) -> InteractionReply:
        kind = interaction.get("type")
        if kind == PING:
            return InteractionReply(ui.pong())
        user_id = _user_id(interaction)
        data = interaction.get("data") or {}
        if kind == APPLICATION_COMMAND:
            return self._handle_command(interaction, user_id, data)
        if kind == MESSAGE_COMPONENT:
            return self._handle_component(interaction, user_id, data)
        if kind == MODAL_SUBMIT:
            return self._handle_modal(interaction, user_id, data)
        raise InteractionError(f"unexpected interaction type {kind}")

    # ------------------------------------------------------------------
    # application commands

    def _handle_command(self, interaction: dict[str, Any], user_id: str, data: dict[str, Any]) -> InteractionReply:
        name = data.get("name")
        if name in ISSUE_COMMANDS:
            return self._start_issue(interaction, user_id, data, ISSUE_COMMANDS[name])
        if name == CMD_MANAGE:
            token = interaction["token"]
            return InteractionReply(
                ui.deferred_ephemeral(),
                lambda: self._send_management_view(token, user_id),
            )
        raise InteractionError(f"unhandled application command: {name}")

    def _start_issue(
        self,
        interaction: dict[str, Any],
        user_id: str,
        data: dict[str, Any],
        kind: IssueKind,
    ) -> InteractionReply:
        source = _target_message(data)
        channel = ChannelContext(
            channel_id=str(interaction.get("channel_id") or ""),
            guild_id=str(interaction.get("guild_id") or ""),
        )
        try:
            started = self._wizard.start(user_id, channel, source, kind)
        except StorageFailureError:
            logger.exception("failed to start issue wizard")
            return InteractionReply(ui.ephemeral_message(messages.INTERNAL_ERROR))
        if not started.registrations:
            return InteractionReply(ui.ephemeral_message(messages.NO_REPOSITORIES))
        select = ui.repository_select(ui.ID_ISSUE_CREATE_1 + started.token, started.registrations)
        return InteractionReply(
            ui.ephemeral_message(f"Create {kind.display} [1 / 2]", components=[select])
        )

    def _send_management_view(self, interaction_token: str, user_id: str) -> None:
        try:
            registrations = self._repositories.registrations(user_id)
        except StorageFailureError:
            logger.exception("failed to list repositories")
            self._followups.create_followup(
                interaction_token,
                {"content": messages.INTERNAL_ERROR, "flags": ui.EPHEMERAL},
            )
            return
        for chunk in ui.chunked(ui.management_view(registrations)):
            self._followups.create_followup(
                interaction_token,
                {"flags": ui.EPHEMERAL | ui.IS_COMPONENTS_V2, "components": chunk},
            )

    # ------------------------------------------------------------------
    # message components

    def _handle_component(self, interaction: dict[str, Any], user_id: str, data: dict[str, Any]) -> InteractionReply:
        custom_id = str(data.get("custom_id", ""))

        if custom_id == ui.ID_REPO_ADD_1:
            return InteractionReply(
                ui.modal(
                    ui.ID_REPO_ADD_2,
                    "Add repository",
                    [
                        ui.text_input(
                            "url",
                            "Repository URL",
                            placeholder="https://github.com/{OWNER}/{REPO}",
                        ),
                        ui.text_input(
                            "token",
                            "Token",
                            placeholder="Access token with issues read & write",
                        ),
                    ],
                )
            )

        if custom_id.startswith(ui.ID_ISSUE_CREATE_1):
            token = custom_id.removeprefix(ui.ID_ISSUE_CREATE_1)
            registration_id = _parse_id((data.get("values") or [""])[0])
            try:
                session = self._wizard.select_repository(user_id, token, registration_id)
            except (NotFoundError, InvalidArgumentError) as exc:
                return InteractionReply(ui.ephemeral_message(messages.issue_failure(exc)))
            return InteractionReply(
                ui.modal(
                    ui.ID_ISSUE_CREATE_2 + token,
                    f"Create {session.issue_kind.display} [2 / 2]",
                    [ui.text_input("title", "Title")],
                )
            )

        if custom_id.startswith(ui.ID_REPO_DELETE):
            registration_id = _parse_id(custom_id.removeprefix(ui.ID_REPO_DELETE))
            try:
                registration = self._repositories.remove(user_id, registration_id)
            except NotFoundError:
                return InteractionReply(ui.update_with_text(messages.REPOSITORY_NOT_FOUND))
            except StorageFailureError:
                logger.exception("failed to delete repository", extra={"data": {"id": registration_id}})
                return InteractionReply(ui.update_with_text(messages.INTERNAL_ERROR))
            return InteractionReply(
                ui.update_with_text(f":white_check_mark: Repo deleted: {registration.display_name}")
            )

        if custom_id.startswith(ui.ID_REPO_TEST):
            registration_id = _parse_id(custom_id.removeprefix(ui.ID_REPO_TEST))
            token = interaction["token"]
            return InteractionReply(
                ui.deferred_update(),
                lambda: self._send_test_result(token, user_id, registration_id),
            )

        raise InteractionError(f"unhandled message component interaction: {custom_id}")

    def _send_test_result(self, interaction_token: str, user_id: str, registration_id: int) -> None:
        try:
            check = self._repositories.test(user_id, registration_id)
        except NotFoundError:
            text = messages.REPOSITORY_NOT_FOUND
        except StorageFailureError:
            logger.exception("failed to test repository", extra={"data": {"id": registration_id}})
            text = messages.INTERNAL_ERROR
        else:
            name = check.registration.display_name
            if check.failure is None:
                text = f":white_check_mark: {name}: Test succeeded"
            else:
                text = f":x: {name}: Test failed: {messages.upstream_reason(check.failure)}"
        self._followups.edit_original(interaction_token, ui.text_view(text))

    # ------------------------------------------------------------------
    # modal submits

    def _handle_modal(self, interaction: dict[str, Any], user_id: str, data: dict[str, Any]) -> InteractionReply:
        custom_id = str(data.get("custom_id", ""))
        values = _modal_values(data)
        token = interaction["token"]

        if custom_id.startswith(ui.ID_ISSUE_CREATE_2):
            session_token = custom_id.removeprefix(ui.ID_ISSUE_CREATE_2)
            title = values.get("title", "")
            return InteractionReply(
                ui.deferred_update(),
                lambda: self._submit_issue(token, user_id, session_token, title),
            )

        if custom_id == ui.ID_REPO_ADD_2:
            repo_url = values.get("url", "")
            credential = values.get("token", "")
            return InteractionReply(
                ui.deferred_ephemeral(),
                lambda: self._add_repository(token, user_id, repo_url, credential),
            )

        raise InteractionError(f"unhandled modal submit: {custom_id}")

    def _submit_issue(self, interaction_token: str, user_id: str, session_token: str, title: str) -> None:
        try:
            filed = self._wizard.submit(user_id, session_token, title)
        except (NotFoundError, InvalidArgumentError, UpstreamFailureError) as exc:
            logger.warning("issue submission failed", extra={"data": {"error": str(exc)}})
            text = messages.issue_failure(exc)
        except StorageFailureError as exc:
            logger.exception("issue submission failed")
            text = messages.issue_failure(exc)
        else:
            text = f":white_check_mark: Issue created on {filed.registration.vendor.display}\n{filed.url}"
        self._followups.edit_original(interaction_token, {"content": text, "components": []})

    def _add_repository(self, interaction_token: str, user_id: str, repo_url: str, credential: str) -> None:
        try:
            registration, created = self._repositories.add(user_id, repo_url, credential)
        except (InvalidArgumentError, UpstreamFailureError) as exc:
            logger.warning(
                "failed to add repository",
                extra={"data": {"url": repo_url, "error": str(exc)}},
            )
            text = messages.add_repository_failure(exc)
        except StorageFailureError as exc:
            logger.exception("failed to save repository", extra={"data": {"url": repo_url}})
            text = messages.add_repository_failure(exc)
        else:
            action = "added" if created else "updated"
            text = f":white_check_mark: Repo {action}: {registration.display_name}"
        self._followups.create_followup(interaction_token, {"content": text, "flags": ui.EPHEMERAL})


# --- Helpers ---


def _user_id(interaction: dict[str, Any]) -> str:
    member = interaction.get("member") or {}
    user = member.get("user") or interaction.get("user") or {}
    user_id = user.get("id")
    if not user_id:
        raise InteractionError("no user found for interaction")
    return str(user_id)


def _target_message(data: dict[str, Any]) -> SourceMessage:
    target_id = str(data.get("target_id", ""))
    message = ((data.get("resolved") or {}).get("messages") or {}).get(target_id)
    if message is None:
        raise InteractionError(f"target message {target_id!r} missing from interaction")
    author = message.get("author") or {}
    timestamp = message.get("timestamp")
    return SourceMessage(
        message_id=str(message.get("id", target_id)),
        content=str(message.get("content", "")),
        author_id=str(author.get("id", "")),
        author_name=str(author.get("global_name") or author.get("username", "")),
        timestamp=datetime.fromisoformat(timestamp) if timestamp else None,
    )


def _modal_values(data: dict[str, Any]) -> dict[str, str]:
    values: dict[str, str] = {}
    for row in data.get("components") or []:
        for item in row.get("components") or []:
            custom_id = item.get("custom_id")
            if custom_id:
                values[custom_id] = str(item.get("value") or "")
    return values


def _parse_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise InteractionError(f"invalid id in custom id: {raw!r}") from exc


__all__ = [
    "APPLICATION_COMMAND",
    "InteractionError",
    "InteractionReply",
    "InteractionRouter",
    "MESSAGE_COMPONENT",
    "MODAL_SUBMIT",
    "PING",
]
