from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from issuebot.application.session_manager import WizardSessionManager
from issuebot.domain.session import ChannelContext, IssueKind, IssueSession
from issuebot.errors import InvalidArgumentError, NotFoundError
from issuebot.infrastructure.state.session_registry import InMemorySessionRegistry
from tests.fixtures.fakes import make_source_message


def _session() -> IssueSession:
    return IssueSession(
        requester_id="u1",
        channel=ChannelContext(channel_id="c1", guild_id="g1"),
        source_message=make_source_message(),
        issue_kind=IssueKind.BUG,
    )


def test_create_returns_fresh_tokens() -> None:
    manager = WizardSessionManager(InMemorySessionRegistry())

    tokens = [manager.create(_session()) for _ in range(3)]

    assert tokens == ["1", "2", "3"]


def test_tokens_are_unique_under_concurrency() -> None:
    manager = WizardSessionManager(InMemorySessionRegistry())

    with ThreadPoolExecutor(max_workers=8) as pool:
        tokens = list(pool.map(lambda _: manager.create(_session()), range(500)))

    assert len(set(tokens)) == 500


def test_store_then_load_round_trips() -> None:
    manager = WizardSessionManager(InMemorySessionRegistry())
    token = manager.create(_session())
    advanced = manager.load(token).select_registration(9)

    manager.store(token, advanced)

    assert manager.load(token) == advanced


def test_delete_then_load_is_not_found() -> None:
    manager = WizardSessionManager(InMemorySessionRegistry())
    token = manager.create(_session())

    manager.delete(token)

    with pytest.raises(NotFoundError):
        manager.load(token)


def test_unknown_token_is_not_found() -> None:
    manager = WizardSessionManager(InMemorySessionRegistry())

    with pytest.raises(NotFoundError):
        manager.load("404")


def test_tokens_are_not_reissued_after_delete() -> None:
    manager = WizardSessionManager(InMemorySessionRegistry())
    first = manager.create(_session())
    manager.delete(first)

    assert manager.create(_session()) != first


def test_store_rejects_empty_token() -> None:
    manager = WizardSessionManager(InMemorySessionRegistry())

    with pytest.raises(InvalidArgumentError):
        manager.store("", _session())
