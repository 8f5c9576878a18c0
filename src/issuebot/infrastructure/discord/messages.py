"""User-facing texts for core errors."""

from __future__ import annotations

from issuebot.errors import (
    InvalidArgumentError,
    NotFoundError,
    RegistrationNotFoundError,
    StorageFailureError,
    UpstreamFailureError,
    UpstreamStatus,
)

SESSION_EXPIRED = ":hourglass: This request has expired, please start again"
REPOSITORY_NOT_FOUND = ":x: Repository not found"
NO_REPOSITORIES = ":exclamation: Please add a repository first with /issuebot"
INTERNAL_ERROR = ":x: Internal error"

_UPSTREAM_TEXT = {
    UpstreamStatus.UNAUTHORIZED: "Invalid token",
    UpstreamStatus.NOT_FOUND: "Repository not found",
    UpstreamStatus.OTHER: "Internal error",
}


def upstream_reason(status: UpstreamStatus) -> str:
    return _UPSTREAM_TEXT[status]


def add_repository_failure(exc: InvalidArgumentError | UpstreamFailureError | StorageFailureError) -> str:
    if isinstance(exc, UpstreamFailureError):
        return f":x: Failed to add repo: {upstream_reason(exc.status)}"
    if isinstance(exc, StorageFailureError):
        return ":x: Failed to add repo: Internal error"
    return f":x: Failed to add repo: {exc}"


def issue_failure(
    exc: NotFoundError | InvalidArgumentError | UpstreamFailureError | StorageFailureError,
) -> str:
    if isinstance(exc, RegistrationNotFoundError):
        return REPOSITORY_NOT_FOUND
    if isinstance(exc, NotFoundError):
        return SESSION_EXPIRED
    if isinstance(exc, UpstreamFailureError):
        return f":x: Failed to create issue: {upstream_reason(exc.status)}"
    if isinstance(exc, StorageFailureError):
        return ":x: Failed to create issue: Internal error"
    return f":x: Failed to create issue: {exc}"


__all__ = [
    "INTERNAL_ERROR",
    "NO_REPOSITORIES",
    "REPOSITORY_NOT_FOUND",
    "SESSION_EXPIRED",
    "add_repository_failure",
    "issue_failure",
    "upstream_reason",
]
