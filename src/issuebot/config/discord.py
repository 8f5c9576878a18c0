"""Discord application settings."""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from issuebot.infrastructure.discord.rest import DISCORD_API_BASE_URL


class DiscordSettings(BaseSettings):
    """Credentials and endpoints for the Discord application."""

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    application_id: str = Field(default="", alias="DISCORD_APP_ID")
    bot_token: SecretStr = Field(default_factory=lambda: SecretStr(""), alias="DISCORD_BOT_TOKEN")
    public_key: str = Field(default="", alias="DISCORD_PUBLIC_KEY")
    api_base_url: str = Field(default=DISCORD_API_BASE_URL, alias="DISCORD_API_BASE_URL")

    @property
    def bot_token_value(self) -> str:
        return self.bot_token.get_secret_value()


__all__ = ["DiscordSettings"]
