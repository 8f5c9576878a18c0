from __future__ import annotations

import json

import httpx
import pytest

from issuebot.errors import UpstreamFailureError, UpstreamStatus
from issuebot.infrastructure.vendors.github import GitHubClient
from tests.fixtures.fakes import make_registration


def test_check_repository_sends_token_and_api_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"full_name": "acme/widgets"})

    client = GitHubClient(transport=httpx.MockTransport(handler))

    status = client.check_repository(make_registration())

    assert status == 200
    [request] = seen
    assert request.method == "GET"
    assert str(request.url) == "https://api.github.com/repos/acme/widgets"
    assert request.headers["Authorization"] == "Bearer ghp_secret"
    assert request.headers["Accept"] == "application/vnd.github+json"
    assert request.headers["X-GitHub-Api-Version"] == "2022-11-28"


def test_create_issue_posts_title_body_and_labels() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            201,
            json={"number": 12, "html_url": "https://github.com/acme/widgets/issues/12"},
        )

    client = GitHubClient(base_url="https://ghe.example/api/v3", transport=httpx.MockTransport(handler))

    url = client.create_issue(make_registration(), title="Crash", body="> boom", labels=["bug"])

    assert url == "https://github.com/acme/widgets/issues/12"
    [request] = seen
    assert request.method == "POST"
    assert str(request.url) == "https://ghe.example/api/v3/repos/acme/widgets/issues"
    assert json.loads(request.content) == {"title": "Crash", "body": "> boom", "labels": ["bug"]}


def test_path_segments_are_percent_encoded() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"html_url": "https://github.com/acme/x/issues/1"})

    client = GitHubClient(transport=httpx.MockTransport(handler))
    registration = make_registration(org_or_owner="acme?x", repo_name="wid gets#1")

    client.create_issue(registration, title="Crash", body="> boom")

    [request] = seen
    assert request.url.raw_path == b"/repos/acme%3Fx/wid%20gets%231/issues"


def test_create_issue_omits_empty_labels() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert "labels" not in json.loads(request.content)
        return httpx.Response(201, json={"html_url": "https://github.com/acme/widgets/issues/1"})

    client = GitHubClient(transport=httpx.MockTransport(handler))

    client.create_issue(make_registration(), title="Idea", body="text")


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [
        (401, UpstreamStatus.UNAUTHORIZED),
        (403, UpstreamStatus.UNAUTHORIZED),
        (404, UpstreamStatus.NOT_FOUND),
        (500, UpstreamStatus.OTHER),
    ],
)
def test_error_statuses_are_classified(status_code: int, expected: UpstreamStatus) -> None:
    client = GitHubClient(transport=httpx.MockTransport(lambda _: httpx.Response(status_code)))

    with pytest.raises(UpstreamFailureError) as excinfo:
        client.check_repository(make_registration())

    assert excinfo.value.status is expected
    assert excinfo.value.http_status == status_code


def test_transport_errors_are_upstream_failures() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    client = GitHubClient(transport=httpx.MockTransport(handler))

    with pytest.raises(UpstreamFailureError) as excinfo:
        client.create_issue(make_registration(), title="Crash", body="")

    assert excinfo.value.status is UpstreamStatus.OTHER
    assert excinfo.value.http_status is None


def test_non_json_response_is_an_upstream_failure() -> None:
    client = GitHubClient(transport=httpx.MockTransport(lambda _: httpx.Response(200, text="<html>")))

    with pytest.raises(UpstreamFailureError):
        client.check_repository(make_registration())
