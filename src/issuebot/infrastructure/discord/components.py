"""Builders for Discord interaction responses and message components."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from issuebot.domain.registration import Registration

# interaction callback types
PONG = 1
CHANNEL_MESSAGE = 4
DEFERRED_CHANNEL_MESSAGE = 5
DEFERRED_UPDATE_MESSAGE = 6
UPDATE_MESSAGE = 7
MODAL = 9

# message flags
EPHEMERAL = 1 << 6
IS_COMPONENTS_V2 = 1 << 15

# component types
ACTION_ROW = 1
BUTTON = 2
STRING_SELECT = 3
TEXT_INPUT = 4
TEXT_DISPLAY = 10
CONTAINER = 17

BUTTON_PRIMARY = 1
BUTTON_SECONDARY = 2
BUTTON_DANGER = 4
TEXT_INPUT_SHORT = 1

MAX_SELECT_OPTIONS = 25
MAX_COMPONENTS_PER_MESSAGE = 30

# custom id prefixes carried through component callbacks
ID_ISSUE_CREATE_1 = "issueCreate1-"
ID_ISSUE_CREATE_2 = "issueCreate2-"
ID_REPO_ADD_1 = "repoAdd1"
ID_REPO_ADD_2 = "repoAdd2"
ID_REPO_DELETE = "repoDelete-"
ID_REPO_TEST = "repoTest-"


def pong() -> dict[str, Any]:
    return {"type": PONG}


def ephemeral_message(content: str, *, components: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {"content": content, "flags": EPHEMERAL}
    if components:
        data["components"] = components
    return {"type": CHANNEL_MESSAGE, "data": data}


def deferred_ephemeral() -> dict[str, Any]:
    return {"type": DEFERRED_CHANNEL_MESSAGE, "data": {"flags": EPHEMERAL}}


def deferred_update() -> dict[str, Any]:
    return {"type": DEFERRED_UPDATE_MESSAGE}


def update_with_text(content: str) -> dict[str, Any]:
    return {"type": UPDATE_MESSAGE, "data": text_view(content)}


def text_view(content: str) -> dict[str, Any]:
    """Message body made of a single text display (components v2)."""
    return {
        "flags": EPHEMERAL | IS_COMPONENTS_V2,
        "components": [{"type": TEXT_DISPLAY, "content": content}],
    }


def modal(custom_id: str, title: str, inputs: Sequence[dict[str, Any]]) -> dict[str, Any]:
    return {
        "type": MODAL,
        "data": {
            "custom_id": custom_id,
            "title": title,
            "components": [{"type": ACTION_ROW, "components": [item]} for item in inputs],
        },
    }


def text_input(custom_id: str, label: str, *, placeholder: str = "", required: bool = True) -> dict[str, Any]:
    item: dict[str, Any] = {
        "type": TEXT_INPUT,
        "custom_id": custom_id,
        "label": label,
        "style": TEXT_INPUT_SHORT,
        "required": required,
    }
    if placeholder:
        item["placeholder"] = placeholder
    return item


def repository_select(custom_id: str, registrations: Sequence[Registration]) -> dict[str, Any]:
    options = [
        {"label": registration.display_name, "value": str(registration.id)}
        for registration in registrations[:MAX_SELECT_OPTIONS]
    ]
    return {
        "type": ACTION_ROW,
        "components": [
            {
                "type": STRING_SELECT,
                "custom_id": custom_id,
                "options": options,
                "placeholder": "Choose repository",
            }
        ],
    }


def management_view(registrations: Sequence[Registration]) -> list[dict[str, Any]]:
    """Components listing a user's repositories with delete/test buttons."""
    components: list[dict[str, Any]] = [
        {"type": TEXT_DISPLAY, "content": f"{len(registrations)} repos"},
    ]
    for registration in registrations:
        components.append(
            {
                "type": CONTAINER,
                "components": [
                    {
                        "type": TEXT_DISPLAY,
                        "content": f"[{registration.display_name}]({registration.url})",
                    },
                    {
                        "type": ACTION_ROW,
                        "components": [
                            _button(f"{ID_REPO_DELETE}{registration.id}", "Delete", BUTTON_DANGER),
                            _button(f"{ID_REPO_TEST}{registration.id}", "Test", BUTTON_SECONDARY),
                        ],
                    },
                ],
            }
        )
    components.append(
        {
            "type": ACTION_ROW,
            "components": [_button(ID_REPO_ADD_1, "Add repository", BUTTON_PRIMARY)],
        }
    )
    return components


def chunked(
    components: Sequence[dict[str, Any]],
    size: int = MAX_COMPONENTS_PER_MESSAGE,
) -> Iterator[list[dict[str, Any]]]:
    for start in range(0, len(components), size):
        yield list(components[start : start + size])


def _button(custom_id: str, label: str, style: int) -> dict[str, Any]:
    return {"type": BUTTON, "custom_id": custom_id, "label": label, "style": style}


__all__ = [
    "EPHEMERAL",
    "ID_ISSUE_CREATE_1",
    "ID_ISSUE_CREATE_2",
    "ID_REPO_ADD_1",
    "ID_REPO_ADD_2",
    "ID_REPO_DELETE",
    "ID_REPO_TEST",
    "IS_COMPONENTS_V2",
    "chunked",
    "deferred_ephemeral",
    "deferred_update",
    "ephemeral_message",
    "management_view",
    "modal",
    "pong",
    "repository_select",
    "text_input",
    "text_view",
    "update_with_text",
]
