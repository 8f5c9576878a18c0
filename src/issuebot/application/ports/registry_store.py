"""Port describing persistent repository registration access."""

from __future__ import annotations

from typing import Protocol

from issuebot.domain.registration import Registration, Vendor


class RegistryStorePort(Protocol):
    """Durable store of repository registrations keyed by numeric id."""

    def create_or_update(
        self,
        owner_user_id: str,
        vendor: Vendor | str,
        org_or_owner: str,
        repo_name: str,
        credential: str,
    ) -> tuple[Registration, bool]:
        """Insert or update the registration for the business key.

        Returns the stored registration and whether it was newly created.
        """

    def get(self, registration_id: int) -> Registration:
        """Return the registration identified by ``registration_id``."""

    def list_by_owner(self, owner_user_id: str) -> list[Registration]:
        """Return the owner's registrations ordered by display name."""

    def list_all(self) -> list[Registration]:
        """Return every registration in no particular order."""

    def count_by_owner(self, owner_user_id: str) -> int:
        """Return the number of registrations held by the owner."""

    def delete(self, registration_id: int) -> None:
        """Remove the registration and its index entry, if present."""


__all__ = ["RegistryStorePort"]
