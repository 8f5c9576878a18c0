from __future__ import annotations

from collections.abc import Sequence

import pytest

from issuebot.domain.registration import Registration, Vendor
from issuebot.errors import InvalidArgumentError
from issuebot.infrastructure.vendors.gateway import HttpVendorGateway
from tests.fixtures.fakes import make_registration


class RecordingClient:
    def __init__(self, name: str) -> None:
        self.name = name
        self.calls: list[tuple[str, str]] = []

    def check_repository(self, registration: Registration) -> int:
        self.calls.append(("check", registration.full_name))
        return 200

    def create_issue(
        self,
        registration: Registration,
        *,
        title: str,
        body: str,
        labels: Sequence[str] = (),
    ) -> str:
        self.calls.append(("create", title))
        return f"https://{self.name}/issue"


def test_calls_are_dispatched_by_vendor() -> None:
    github = RecordingClient("github")
    gitlab = RecordingClient("gitlab")
    gateway = HttpVendorGateway({Vendor.GITHUB: github, Vendor.GITLAB: gitlab})

    gateway.verify_credential(make_registration(vendor=Vendor.GITLAB))
    url = gateway.create_remote_issue(make_registration(), "Crash", "body", ["bug"])

    assert gitlab.calls == [("check", "acme/widgets")]
    assert github.calls == [("create", "Crash")]
    assert url == "https://github/issue"


def test_every_vendor_needs_a_client() -> None:
    with pytest.raises(ValueError, match="gitlab"):
        HttpVendorGateway({Vendor.GITHUB: RecordingClient("github")})


def test_blank_title_is_rejected() -> None:
    github = RecordingClient("github")
    gateway = HttpVendorGateway({Vendor.GITHUB: github, Vendor.GITLAB: RecordingClient("gitlab")})

    with pytest.raises(InvalidArgumentError):
        gateway.create_remote_issue(make_registration(), "  ", "body", [])
    assert github.calls == []
