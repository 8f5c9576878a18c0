"""Shared plumbing for the vendor HTTP clients."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from issuebot.errors import UpstreamFailureError, UpstreamStatus

logger = logging.getLogger("issuebot.vendors")


def send(client: httpx.Client, request: httpx.Request, *, operation: str) -> httpx.Response:
    """Send ``request`` and raise ``UpstreamFailureError`` for failed responses."""
    try:
        response = client.send(request)
    except httpx.HTTPError as exc:
        raise UpstreamFailureError(
            f"{operation}: {exc.__class__.__name__}: {exc}",
            status=UpstreamStatus.OTHER,
        ) from exc
    if response.status_code >= 400:
        logger.warning(
            "vendor request failed",
            extra={
                "data": {
                    "operation": operation,
                    "method": request.method,
                    "url": str(request.url.copy_with(query=None)),
                    "status_code": response.status_code,
                }
            },
        )
        raise UpstreamFailureError(
            f"{operation}: vendor returned {response.status_code}",
            status=UpstreamStatus.from_http(response.status_code),
            http_status=response.status_code,
        )
    return response


def json_object(response: httpx.Response, *, operation: str) -> dict[str, Any]:
    """Decode a JSON object body, raising ``UpstreamFailureError`` otherwise."""
    try:
        payload = response.json()
    except ValueError as exc:
        raise UpstreamFailureError(
            f"{operation}: response is not valid JSON",
            status=UpstreamStatus.OTHER,
            http_status=response.status_code,
        ) from exc
    if not isinstance(payload, dict):
        raise UpstreamFailureError(
            f"{operation}: expected a JSON object",
            status=UpstreamStatus.OTHER,
            http_status=response.status_code,
        )
    return payload


__all__ = ["json_object", "send"]
