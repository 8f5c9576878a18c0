from __future__ import annotations

from pathlib import Path

import pytest

from issuebot.infrastructure.state.registry_store import SqliteRegistryStore


@pytest.fixture
def store(tmp_path: Path) -> SqliteRegistryStore:
    return SqliteRegistryStore(tmp_path / "issuebot.db")


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # keep a developer's .env and shell settings out of the suite
    monkeypatch.chdir(tmp_path)
    for name in (
        "DISCORD_APP_ID",
        "DISCORD_BOT_TOKEN",
        "DISCORD_PUBLIC_KEY",
        "DISCORD_API_BASE_URL",
        "GITHUB_API_BASE_URL",
        "GITLAB_API_BASE_URL",
        "VENDOR_TIMEOUT_SECONDS",
        "ISSUEBOT_DB_PATH",
        "ISSUEBOT_HOST",
        "ISSUEBOT_PORT",
        "K_SERVICE",
        "KUBERNETES_SERVICE_HOST",
    ):
        monkeypatch.delenv(name, raising=False)
