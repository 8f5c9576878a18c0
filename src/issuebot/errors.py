"""Error kinds surfaced by the registry store, session manager and vendor gateway."""

from __future__ import annotations

from enum import StrEnum


class InvalidArgumentError(ValueError):
    """Raised when a required input is missing or malformed."""


class NotFoundError(LookupError):
    """Raised when no registration or session exists for the given key."""


class RegistrationNotFoundError(NotFoundError):
    """Raised when a registration id is unknown or not visible to the caller."""


class StorageFailureError(RuntimeError):
    """Raised when the embedded storage engine fails."""


class UpstreamStatus(StrEnum):
    """Coarse classification of vendor API failures."""

    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    OTHER = "other"

    @classmethod
    def from_http(cls, status_code: int) -> UpstreamStatus:
        if status_code in (401, 403):
            return cls.UNAUTHORIZED
        if status_code == 404:
            return cls.NOT_FOUND
        return cls.OTHER


class UpstreamFailureError(RuntimeError):
    """Raised when an issue-tracker vendor rejects or fails a request."""

    def __init__(self, message: str, *, status: UpstreamStatus, http_status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.http_status = http_status


__all__ = [
    "InvalidArgumentError",
    "NotFoundError",
    "RegistrationNotFoundError",
    "StorageFailureError",
    "UpstreamFailureError",
    "UpstreamStatus",
]
