"""Port describing the issue-tracker vendor APIs."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from issuebot.domain.registration import Registration


class VendorGatewayPort(Protocol):
    """Authenticated calls against a registration's issue tracker."""

    def verify_credential(self, registration: Registration) -> int:
        """Check the credential can read the repository; return the HTTP status."""

    def create_remote_issue(
        self,
        registration: Registration,
        title: str,
        body: str,
        labels: Sequence[str],
    ) -> str:
        """Create an issue and return its web URL."""


__all__ = ["VendorGatewayPort"]
