"""Vendor gateway dispatching to one client per issue tracker."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

from issuebot.application.ports.vendor_gateway import VendorGatewayPort
from issuebot.domain.registration import Registration, Vendor
from issuebot.errors import InvalidArgumentError


class VendorClient(Protocol):
    def check_repository(self, registration: Registration) -> int:
        ...

    def create_issue(
        self,
        registration: Registration,
        *,
        title: str,
        body: str,
        labels: Sequence[str] = (),
    ) -> str:
        ...


class HttpVendorGateway(VendorGatewayPort):
    """Routes each call to the client registered for the registration's vendor."""

    def __init__(self, clients: Mapping[Vendor, VendorClient]) -> None:
        missing = set(Vendor) - set(clients)
        if missing:
            names = ", ".join(sorted(vendor.value for vendor in missing))
            raise ValueError(f"no vendor client configured for: {names}")
        self._clients = dict(clients)

    def verify_credential(self, registration: Registration) -> int:
        return self._clients[registration.vendor].check_repository(registration)

    def create_remote_issue(
        self,
        registration: Registration,
        title: str,
        body: str,
        labels: Sequence[str],
    ) -> str:
        if not title.strip():
            raise InvalidArgumentError("issue title must not be empty")
        return self._clients[registration.vendor].create_issue(
            registration,
            title=title,
            body=body,
            labels=labels,
        )


__all__ = ["HttpVendorGateway", "VendorClient"]
