from __future__ import annotations

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from issuebot.infrastructure.discord.signature import (
    InteractionSignatureVerifier,
    SignatureVerificationError,
)


def _keypair() -> tuple[Ed25519PrivateKey, str]:
    private_key = Ed25519PrivateKey.generate()
    public_hex = private_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw).hex()
    return private_key, public_hex


def test_valid_signature_is_accepted() -> None:
    private_key, public_hex = _keypair()
    body = b'{"type":1}'
    signature = private_key.sign(b"1700000000" + body).hex()

    InteractionSignatureVerifier(public_hex).verify(signature_hex=signature, timestamp="1700000000", body=body)


def test_tampered_body_is_rejected() -> None:
    private_key, public_hex = _keypair()
    signature = private_key.sign(b"1700000000" + b'{"type":1}').hex()

    with pytest.raises(SignatureVerificationError):
        InteractionSignatureVerifier(public_hex).verify(
            signature_hex=signature,
            timestamp="1700000000",
            body=b'{"type":2}',
        )


@pytest.mark.parametrize(
    ("signature_hex", "timestamp"),
    [(None, "1"), ("ab", None), ("not-hex", "1")],
)
def test_missing_or_malformed_headers_are_rejected(signature_hex: str | None, timestamp: str | None) -> None:
    _, public_hex = _keypair()

    with pytest.raises(SignatureVerificationError):
        InteractionSignatureVerifier(public_hex).verify(signature_hex=signature_hex, timestamp=timestamp, body=b"{}")


def test_bad_public_key_is_a_configuration_error() -> None:
    with pytest.raises(ValueError):
        InteractionSignatureVerifier("abcd")
