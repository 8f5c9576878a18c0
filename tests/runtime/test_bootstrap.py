from __future__ import annotations

from pathlib import Path

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from fastapi.testclient import TestClient

from issuebot.domain.registration import Vendor
from issuebot.runtime.bootstrap import build_runtime
from issuebot.runtime.settings import Settings
from issuebot.server import create_app


def _public_key_hex() -> str:
    key = Ed25519PrivateKey.generate()
    return key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw).hex()


@pytest.fixture
def configured_env(monkeypatch, tmp_path: Path) -> Path:
    db_path = tmp_path / "data" / "bot.db"
    monkeypatch.setenv("DISCORD_APP_ID", "app1")
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "bot-token")
    monkeypatch.setenv("DISCORD_PUBLIC_KEY", _public_key_hex())
    monkeypatch.setenv("ISSUEBOT_DB_PATH", str(db_path))
    return db_path


def test_build_runtime_wires_components(configured_env: Path) -> None:
    runtime = build_runtime(Settings())

    registration, created = runtime.store.create_or_update("u1", Vendor.GITHUB, "acme", "widgets", "t")

    assert created
    assert configured_env.exists()
    assert runtime.repositories.registrations("u1") == [registration]
    assert runtime.discord_client.application_id == "app1"
    assert runtime.interaction_deps_provider().router is runtime.router


def test_build_runtime_requires_discord_configuration(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ISSUEBOT_DB_PATH", str(tmp_path / "bot.db"))
    monkeypatch.setenv("DISCORD_PUBLIC_KEY", _public_key_hex())

    with pytest.raises(RuntimeError, match="DISCORD_APP_ID"):
        build_runtime(Settings())


def test_app_serves_health_endpoint(configured_env: Path) -> None:
    app = create_app(build_runtime(Settings()))

    with TestClient(app) as client:
        response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
