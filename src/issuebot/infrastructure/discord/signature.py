"""Verification of Discord interaction request signatures."""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

SIGNATURE_HEADER = "X-Signature-Ed25519"
TIMESTAMP_HEADER = "X-Signature-Timestamp"


class SignatureVerificationError(Exception):
    """Raised when an inbound interaction is not signed by Discord."""


class InteractionSignatureVerifier:
    """Checks the Ed25519 signature Discord attaches to every interaction."""

    def __init__(self, public_key_hex: str) -> None:
        try:
            key_bytes = bytes.fromhex(public_key_hex.strip())
            self._public_key = Ed25519PublicKey.from_public_bytes(key_bytes)
        except ValueError as exc:
            raise ValueError("discord public key must be 32 bytes of hex") from exc

    def verify(self, *, signature_hex: str | None, timestamp: str | None, body: bytes) -> None:
        if not signature_hex or not timestamp:
            raise SignatureVerificationError("missing signature headers")
        try:
            signature = bytes.fromhex(signature_hex)
        except ValueError as exc:
            raise SignatureVerificationError("malformed signature") from exc
        try:
            self._public_key.verify(signature, timestamp.encode("utf-8") + body)
        except InvalidSignature as exc:
            raise SignatureVerificationError("invalid request signature") from exc


__all__ = [
    "InteractionSignatureVerifier",
    "SIGNATURE_HEADER",
    "SignatureVerificationError",
    "TIMESTAMP_HEADER",
]
