"""Minimal Discord REST client for commands and interaction follow-ups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

DISCORD_API_BASE_URL = "https://discord.com/api/v10"


class DiscordApiError(RuntimeError):
    """Raised when Discord responds with an unexpected status."""

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class DiscordRestClient:
    """HTTP client for the handful of Discord endpoints the bot needs."""

    application_id: str
    bot_token: str
    base_url: str = DISCORD_API_BASE_URL
    user_agent: str = "issuebot"
    timeout_seconds: float = 10.0
    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        if not self.application_id:
            raise ValueError("discord application_id must not be empty")

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            transport=self.transport,
            headers={"User-Agent": self.user_agent},
        )

    def _bot_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bot {self.bot_token}"}

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        headers = self._bot_headers() if authenticated else {}
        with self._client() as client:
            response = client.request(method, path, json=json, headers=headers)
        if response.status_code >= 400:
            raise DiscordApiError(
                f"discord returned {response.status_code} for {method} {path}",
                status_code=response.status_code,
            )
        return response

    # --- application commands ---

    def list_commands(self) -> list[dict[str, Any]]:
        response = self._request("GET", f"/applications/{self.application_id}/commands")
        payload = response.json()
        return payload if isinstance(payload, list) else []

    def create_command(self, command: dict[str, Any]) -> dict[str, Any]:
        response = self._request(
            "POST",
            f"/applications/{self.application_id}/commands",
            json=command,
        )
        return response.json()

    def delete_command(self, command_id: str) -> None:
        self._request("DELETE", f"/applications/{self.application_id}/commands/{command_id}")

    # --- interaction follow-ups (authorized by the interaction token) ---

    def create_followup(self, interaction_token: str, message: dict[str, Any]) -> None:
        self._request(
            "POST",
            f"/webhooks/{self.application_id}/{interaction_token}",
            json=message,
            authenticated=False,
        )

    def edit_original(self, interaction_token: str, message: dict[str, Any]) -> None:
        self._request(
            "PATCH",
            f"/webhooks/{self.application_id}/{interaction_token}/messages/@original",
            json=message,
            authenticated=False,
        )


__all__ = ["DISCORD_API_BASE_URL", "DiscordApiError", "DiscordRestClient"]
