"""GitHub REST client for repository checks and issue creation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import quote

import httpx

from issuebot.domain.registration import Registration
from issuebot.infrastructure.vendors.base import json_object, send

logger = logging.getLogger("issuebot.vendors.github")

GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"


@dataclass
class GitHubClient:
    """Talks to the GitHub REST API with a repository's personal access token."""

    base_url: str = GITHUB_API_BASE_URL
    timeout_seconds: float = 5.0
    transport: httpx.BaseTransport | None = None

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            transport=self.transport,
        )

    def _headers(self, token: str) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }

    def _repo_path(self, registration: Registration) -> str:
        owner = quote(registration.org_or_owner, safe="")
        repo = quote(registration.repo_name, safe="")
        return f"/repos/{owner}/{repo}"

    def check_repository(self, registration: Registration) -> int:
        path = self._repo_path(registration)
        with self._client() as client:
            request = client.build_request("GET", path, headers=self._headers(registration.credential))
            response = send(client, request, operation="github check repository")
        info = json_object(response, operation="github check repository")
        logger.debug(
            "received repository info from github",
            extra={"data": {"full_name": info.get("full_name")}},
        )
        return response.status_code

    def create_issue(
        self,
        registration: Registration,
        *,
        title: str,
        body: str,
        labels: Sequence[str] = (),
    ) -> str:
        path = self._repo_path(registration) + "/issues"
        payload: dict[str, object] = {"title": title, "body": body}
        if labels:
            payload["labels"] = list(labels)
        with self._client() as client:
            request = client.build_request(
                "POST",
                path,
                headers=self._headers(registration.credential),
                json=payload,
            )
            response = send(client, request, operation="github create issue")
        info = json_object(response, operation="github create issue")
        html_url = info.get("html_url")
        logger.info(
            "issue created on github",
            extra={"data": {"repo": registration.full_name, "number": info.get("number")}},
        )
        return html_url if isinstance(html_url, str) else ""


__all__ = ["GITHUB_API_BASE_URL", "GitHubClient"]
