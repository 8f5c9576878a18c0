"""Parsing of repository URLs entered by users."""

from __future__ import annotations

from urllib.parse import urlsplit

from issuebot.domain.registration import Vendor
from issuebot.errors import InvalidArgumentError


class InvalidRepoUrlError(InvalidArgumentError):
    """Raised when a repository URL cannot be mapped to a vendor repository."""


def parse_repo_url(raw_url: str) -> tuple[Vendor, str, str]:
    """Return ``(vendor, org_or_owner, repo_name)`` for a repository web URL."""
    parts = urlsplit(raw_url.strip())
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise InvalidRepoUrlError("not a valid URL")
    host = parts.hostname or ""
    vendor = Vendor.from_host(host.lower())
    if vendor is None:
        hosts = " or ".join(v.host for v in Vendor)
        raise InvalidRepoUrlError(f"host must be {hosts}")
    segments = parts.path.strip("/").split("/")
    if len(segments) != 2 or not all(segments):
        raise InvalidRepoUrlError("path must have exactly two parts")
    org_or_owner, repo_name = segments
    repo_name = repo_name.removesuffix(".git")
    if not repo_name:
        raise InvalidRepoUrlError("repository name must not be empty")
    return vendor, org_or_owner, repo_name


__all__ = ["InvalidRepoUrlError", "parse_repo_url"]
