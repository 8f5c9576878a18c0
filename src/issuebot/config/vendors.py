"""Issue-tracker API settings."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from issuebot.infrastructure.vendors.github import GITHUB_API_BASE_URL
from issuebot.infrastructure.vendors.gitlab import GITLAB_API_BASE_URL


class VendorSettings(BaseSettings):
    """Endpoints and timeouts for the GitHub and GitLab REST APIs."""

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    github_api_base_url: str = Field(default=GITHUB_API_BASE_URL, alias="GITHUB_API_BASE_URL")
    gitlab_api_base_url: str = Field(default=GITLAB_API_BASE_URL, alias="GITLAB_API_BASE_URL")
    timeout_seconds: float = Field(default=5.0, alias="VENDOR_TIMEOUT_SECONDS")

    @field_validator("timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("VENDOR_TIMEOUT_SECONDS must be positive")
        return value


__all__ = ["VendorSettings"]
