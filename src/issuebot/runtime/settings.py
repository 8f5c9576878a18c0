"""Configuration for the issuebot runtime."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from issuebot.config.discord import DiscordSettings
from issuebot.config.vendors import VendorSettings


class Settings(BaseSettings):
    """Issuebot runtime configuration resolved from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # --- Server ---
    listen_host: str = Field(default="0.0.0.0", alias="ISSUEBOT_HOST")  # noqa: S104
    port: int = Field(default=8080, alias="ISSUEBOT_PORT")

    # --- Storage ---
    db_path: Path = Field(default=Path("issuebot.db"), alias="ISSUEBOT_DB_PATH")

    # --- Component settings ---
    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    vendors: VendorSettings = Field(default_factory=VendorSettings)

    @property
    def bot_token_value(self) -> str:
        return self.discord.bot_token_value

    # --- Loader ---
    @classmethod
    def load(cls) -> Settings:
        instance = cls()
        logger = logging.getLogger("issuebot.settings")
        logger.info("issuebot settings loaded: %r", instance)
        return instance


__all__ = ["DiscordSettings", "Settings", "VendorSettings"]
