"""Owner-scoped registration management use case."""

from __future__ import annotations

import logging

from issuebot.application.dto.repository import RepositoryCheck
from issuebot.application.ports.registry_store import RegistryStorePort
from issuebot.application.ports.vendor_gateway import VendorGatewayPort
from issuebot.application.repo_url import parse_repo_url
from issuebot.domain.registration import Registration
from issuebot.errors import InvalidArgumentError, RegistrationNotFoundError, UpstreamFailureError

logger = logging.getLogger("issuebot.repositories")


class RepositoryService:
    """Adds, lists, tests and removes a user's repository registrations."""

    def __init__(self, store: RegistryStorePort, gateway: VendorGatewayPort) -> None:
        self._store = store
        self._gateway = gateway

    def add(self, owner_user_id: str, repo_url: str, credential: str) -> tuple[Registration, bool]:
        """Verify the credential against the vendor, then save the registration."""
        vendor, org_or_owner, repo_name = parse_repo_url(repo_url)
        credential = credential.strip()
        if not credential:
            raise InvalidArgumentError("credential must not be empty")
        candidate = Registration(
            owner_user_id=owner_user_id,
            vendor=vendor,
            org_or_owner=org_or_owner,
            repo_name=repo_name,
            credential=credential,
        )
        self._gateway.verify_credential(candidate)
        return self._store.create_or_update(
            owner_user_id,
            vendor,
            org_or_owner,
            repo_name,
            credential,
        )

    def registrations(self, owner_user_id: str) -> list[Registration]:
        return self._store.list_by_owner(owner_user_id)

    def owned(self, owner_user_id: str, registration_id: int) -> Registration:
        """Return the registration when it belongs to ``owner_user_id``."""
        registration = self._store.get(registration_id)
        if registration.owner_user_id != owner_user_id:
            raise RegistrationNotFoundError(f"registration {registration_id} not found")
        return registration

    def test(self, owner_user_id: str, registration_id: int) -> RepositoryCheck:
        """Re-verify a stored credential against the vendor."""
        registration = self.owned(owner_user_id, registration_id)
        try:
            self._gateway.verify_credential(registration)
        except UpstreamFailureError as exc:
            logger.warning(
                "repository check failed",
                extra={"data": {"id": registration.id, "status": exc.status.value}},
            )
            return RepositoryCheck(registration=registration, failure=exc.status)
        return RepositoryCheck(registration=registration)

    def remove(self, owner_user_id: str, registration_id: int) -> Registration:
        registration = self.owned(owner_user_id, registration_id)
        self._store.delete(registration.id)
        logger.info(
            "registration removed by owner",
            extra={"data": {"id": registration.id, "owner_user_id": owner_user_id}},
        )
        return registration


__all__ = ["RepositoryService"]
