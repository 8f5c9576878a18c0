from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from issuebot.runtime.settings import Settings


def test_settings_defaults() -> None:
    settings = Settings()

    assert settings.db_path == Path("issuebot.db")
    assert settings.port == 8080
    assert settings.vendors.timeout_seconds == 5.0
    assert settings.vendors.github_api_base_url == "https://api.github.com"
    assert settings.discord.api_base_url == "https://discord.com/api/v10"


def test_settings_loads_from_environment(monkeypatch) -> None:
    """Settings loads from environment variables."""
    monkeypatch.setenv("DISCORD_APP_ID", "123")
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "bot-secret")
    monkeypatch.setenv("ISSUEBOT_DB_PATH", "/data/bot.db")
    monkeypatch.setenv("VENDOR_TIMEOUT_SECONDS", "2.5")

    settings = Settings.load()

    assert settings.discord.application_id == "123"
    assert settings.bot_token_value == "bot-secret"
    assert settings.db_path == Path("/data/bot.db")
    assert settings.vendors.timeout_seconds == 2.5
    assert "bot-secret" not in repr(settings)


def test_settings_read_dotenv_file(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("DISCORD_PUBLIC_KEY=abc123\nISSUEBOT_PORT=9000\n")

    settings = Settings()

    assert settings.discord.public_key == "abc123"
    assert settings.port == 9000


def test_non_positive_vendor_timeout_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("VENDOR_TIMEOUT_SECONDS", "0")

    with pytest.raises(ValidationError):
        Settings()
