# src/wallet_auth/services/signature.py
"""Verification of signed wallet challenges."""

from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from wallet_auth.records import Identity
from wallet_auth.services.address import PUBKEY_LENGTH_BYTES, decode_base58
from wallet_auth.services.nonce import challenge_message

SIGNATURE_LENGTH_BYTES = 64


class SignatureVerifier:
    """Check detached Ed25519 signatures over an identity's challenge message."""

    @staticmethod
    def verify_signature_bytes(pubkey_bytes: bytes, message: bytes, signature: bytes) -> bool:
        """Verify an Ed25519 signature over raw bytes."""
        try:
            pubkey = Ed25519PublicKey.from_public_bytes(pubkey_bytes)
            pubkey.verify(signature, message)
            return True
        except (InvalidSignature, ValueError):
            return False

    def verify(self, identity: Identity, signature: str) -> bool:
        """Return True if ``signature`` signs the challenge for ``identity.nonce``.

        Args:
            identity: Identity whose stored address and nonce are checked.
            signature: Base-58 encoded 64-byte detached signature.

        Returns:
            False for any malformed input; the nonce is never modified here.
        """
        if not identity.nonce:
            return False
        try:
            signature_bytes = decode_base58(signature)
            pubkey_bytes = decode_base58(identity.address)
        except ValueError:
            return False
        if len(signature_bytes) != SIGNATURE_LENGTH_BYTES or len(pubkey_bytes) != PUBKEY_LENGTH_BYTES:
            return False

        message = challenge_message(identity.nonce).encode("utf-8")
        return self.verify_signature_bytes(pubkey_bytes, message, signature_bytes)
