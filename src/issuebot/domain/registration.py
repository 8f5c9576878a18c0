"""Repository registration records and the supported issue-tracker vendors."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any

from issuebot.errors import InvalidArgumentError

BUSINESS_KEY_DELIMITER = "-"


class Vendor(StrEnum):
    """Issue-tracker providers a registration can point at."""

    GITHUB = "github"
    GITLAB = "gitlab"

    @property
    def host(self) -> str:
        return _VENDOR_HOSTS[self]

    @property
    def display(self) -> str:
        return _VENDOR_DISPLAY[self]

    @classmethod
    def parse(cls, value: str | Vendor) -> Vendor:
        """Return the vendor for ``value`` or raise ``InvalidArgumentError``."""
        if isinstance(value, Vendor):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidArgumentError(f"invalid vendor: {value!r}") from exc

    @classmethod
    def from_host(cls, host: str) -> Vendor | None:
        for vendor, vendor_host in _VENDOR_HOSTS.items():
            if vendor_host == host:
                return vendor
        return None


_VENDOR_HOSTS: dict[Vendor, str] = {
    Vendor.GITHUB: "github.com",
    Vendor.GITLAB: "gitlab.com",
}

_VENDOR_DISPLAY: dict[Vendor, str] = {
    Vendor.GITHUB: "GitHub",
    Vendor.GITLAB: "GitLab",
}


@dataclass(frozen=True, slots=True)
class Registration:
    """A user's binding to one remote repository and its access credential.

    ``id`` is 0 for a candidate that has not been saved yet (for example while
    its credential is being verified); persisted records always carry a
    positive id.
    """

    owner_user_id: str
    vendor: Vendor
    org_or_owner: str
    repo_name: str
    credential: str = field(repr=False)
    id: int = 0

    def __post_init__(self) -> None:
        if self.id < 0:
            raise InvalidArgumentError("id must be non-negative")
        if not isinstance(self.vendor, Vendor):
            object.__setattr__(self, "vendor", Vendor.parse(self.vendor))
        if not self.owner_user_id:
            raise InvalidArgumentError("owner_user_id must not be empty")
        if not self.org_or_owner:
            raise InvalidArgumentError("org_or_owner must not be empty")
        if not self.repo_name:
            raise InvalidArgumentError("repo_name must not be empty")
        if not self.credential:
            raise InvalidArgumentError("credential must not be empty")

    @property
    def full_name(self) -> str:
        return f"{self.org_or_owner}/{self.repo_name}"

    @property
    def display_name(self) -> str:
        """Human-readable name used for ordering and rendering."""
        return f"{self.vendor.host}/{self.full_name}"

    @property
    def url(self) -> str:
        return f"https://{self.display_name}"

    @property
    def business_key(self) -> str:
        # Components are not escaped: a delimiter inside a component can collide.
        return BUSINESS_KEY_DELIMITER.join(
            (self.owner_user_id, self.vendor.value, self.org_or_owner, self.repo_name)
        )

    @property
    def is_persisted(self) -> bool:
        return self.id > 0

    def with_id(self, registration_id: int) -> Registration:
        return replace(self, id=registration_id)

    def to_record(self) -> dict[str, Any]:
        """Return the flat record stored on disk."""
        return {
            "id": self.id,
            "owner_user_id": self.owner_user_id,
            "vendor": self.vendor.value,
            "org_or_owner": self.org_or_owner,
            "repo_name": self.repo_name,
            "credential": self.credential,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Registration:
        return cls(
            id=int(record["id"]),
            owner_user_id=str(record["owner_user_id"]),
            vendor=Vendor.parse(str(record["vendor"])),
            org_or_owner=str(record["org_or_owner"]),
            repo_name=str(record["repo_name"]),
            credential=str(record["credential"]),
        )


__all__ = ["BUSINESS_KEY_DELIMITER", "Registration", "Vendor"]
