from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from issuebot.application.ports.registry_store import RegistryStorePort
from issuebot.application.ports.vendor_gateway import VendorGatewayPort
from issuebot.domain.registration import Registration, Vendor
from issuebot.domain.session import SourceMessage
from issuebot.errors import (
    InvalidArgumentError,
    RegistrationNotFoundError,
    StorageFailureError,
    UpstreamFailureError,
)


class FakeRegistryStore(RegistryStorePort):
    """In-memory registry store for tests; raises ``failure`` on every call when set."""

    def __init__(self) -> None:
        self._records: dict[int, Registration] = {}
        self._next_id = 1
        self.failure: StorageFailureError | None = None

    def _check(self) -> None:
        if self.failure is not None:
            raise self.failure

    def create_or_update(
        self,
        owner_user_id: str,
        vendor: Vendor | str,
        org_or_owner: str,
        repo_name: str,
        credential: str,
    ) -> tuple[Registration, bool]:
        self._check()
        candidate = Registration(
            owner_user_id=owner_user_id,
            vendor=Vendor.parse(vendor),
            org_or_owner=org_or_owner,
            repo_name=repo_name,
            credential=credential,
        )
        for existing in self._records.values():
            if existing.business_key == candidate.business_key:
                updated = candidate.with_id(existing.id)
                self._records[existing.id] = updated
                return updated, False
        created = candidate.with_id(self._next_id)
        self._next_id += 1
        self._records[created.id] = created
        return created, True

    def get(self, registration_id: int) -> Registration:
        self._check()
        if registration_id <= 0:
            raise InvalidArgumentError(f"invalid registration id: {registration_id}")
        try:
            return self._records[registration_id]
        except KeyError as exc:
            raise RegistrationNotFoundError(f"registration {registration_id} not found") from exc

    def list_by_owner(self, owner_user_id: str) -> list[Registration]:
        self._check()
        found = [r for r in self._records.values() if r.owner_user_id == owner_user_id]
        return sorted(found, key=lambda r: r.display_name)

    def list_all(self) -> list[Registration]:
        self._check()
        return list(self._records.values())

    def count_by_owner(self, owner_user_id: str) -> int:
        return len(self.list_by_owner(owner_user_id))

    def delete(self, registration_id: int) -> None:
        self._check()
        self._records.pop(registration_id, None)


class FakeVendorGateway(VendorGatewayPort):
    """Records vendor calls; raises ``failure`` when set."""

    def __init__(self, *, issue_url: str = "https://github.com/acme/widgets/issues/1") -> None:
        self.issue_url = issue_url
        self.failure: UpstreamFailureError | None = None
        self.verified: list[Registration] = []
        self.issues: list[dict[str, Any]] = []

    def verify_credential(self, registration: Registration) -> int:
        self.verified.append(registration)
        if self.failure is not None:
            raise self.failure
        return 200

    def create_remote_issue(
        self,
        registration: Registration,
        title: str,
        body: str,
        labels: Sequence[str],
    ) -> str:
        if self.failure is not None:
            raise self.failure
        self.issues.append(
            {"registration": registration, "title": title, "body": body, "labels": list(labels)}
        )
        return self.issue_url


class FakeFollowups:
    """Captures follow-up messages sent through the Discord REST API."""

    def __init__(self) -> None:
        self.created: list[tuple[str, dict[str, Any]]] = []
        self.edited: list[tuple[str, dict[str, Any]]] = []

    def create_followup(self, interaction_token: str, message: dict[str, Any]) -> None:
        self.created.append((interaction_token, message))

    def edit_original(self, interaction_token: str, message: dict[str, Any]) -> None:
        self.edited.append((interaction_token, message))


def make_registration(**overrides: Any) -> Registration:
    values: dict[str, Any] = {
        "owner_user_id": "u1",
        "vendor": Vendor.GITHUB,
        "org_or_owner": "acme",
        "repo_name": "widgets",
        "credential": "ghp_secret",
    }
    values.update(overrides)
    return Registration(**values)


def make_source_message(**overrides: Any) -> SourceMessage:
    values: dict[str, Any] = {
        "message_id": "m1",
        "content": "the app crashes\nwhen I click save",
        "author_id": "a1",
        "author_name": "alice",
    }
    values.update(overrides)
    return SourceMessage(**values)
