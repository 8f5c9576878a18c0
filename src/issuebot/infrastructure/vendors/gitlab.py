"""GitLab REST client for project checks and issue creation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import quote

import httpx

from issuebot.domain.registration import Registration
from issuebot.infrastructure.vendors.base import json_object, send

logger = logging.getLogger("issuebot.vendors.gitlab")

GITLAB_API_BASE_URL = "https://gitlab.com/api/v4"


@dataclass
class GitLabClient:
    """Talks to the GitLab REST API with a project access token."""

    base_url: str = GITLAB_API_BASE_URL
    timeout_seconds: float = 5.0
    transport: httpx.BaseTransport | None = None

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            transport=self.transport,
        )

    def _project_path(self, registration: Registration) -> str:
        return "/projects/" + quote(registration.full_name, safe="")

    def check_repository(self, registration: Registration) -> int:
        with self._client() as client:
            request = client.build_request(
                "GET",
                self._project_path(registration),
                headers={"PRIVATE-TOKEN": registration.credential},
            )
            response = send(client, request, operation="gitlab check project")
        info = json_object(response, operation="gitlab check project")
        logger.debug(
            "received project info from gitlab",
            extra={"data": {"path_with_namespace": info.get("path_with_namespace")}},
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
        payload: dict[str, object] = {"title": title, "description": body}
        if labels:
            payload["labels"] = ",".join(labels)
        with self._client() as client:
            request = client.build_request(
                "POST",
                self._project_path(registration) + "/issues",
                headers={"PRIVATE-TOKEN": registration.credential},
                json=payload,
            )
            response = send(client, request, operation="gitlab create issue")
        info = json_object(response, operation="gitlab create issue")
        web_url = info.get("web_url")
        logger.info(
            "issue created on gitlab",
            extra={"data": {"repo": registration.full_name, "iid": info.get("iid")}},
        )
        return web_url if isinstance(web_url, str) else ""


__all__ = ["GITLAB_API_BASE_URL", "GitLabClient"]
