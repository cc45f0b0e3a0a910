# src/wallet_auth/services/address.py
"""Wallet address validation."""

from __future__ import annotations

import base58
from nacl.bindings import crypto_core_ed25519_is_valid_point

PUBKEY_LENGTH_BYTES = 32


def decode_base58(data: str) -> bytes:
    """Decode a base-58 string, raising ValueError on any malformed input."""
    if not isinstance(data, str) or not data or data != data.strip():
        raise ValueError("Expected a non-empty base-58 string without whitespace")
    try:
        return base58.b58decode(data)
    except ValueError as err:
        raise ValueError(f"Invalid base-58 encoding: {err}") from err


def is_valid_address(address: str) -> bool:
    """Return True if ``address`` decodes to a public key on the Ed25519 curve.

    libsodium's point check also rejects non-canonical encodings and
    small-order points, neither of which can be a signing key. This is
    stricter than Solana's ``isOnCurve``: the all-zero System Program id
    decompresses to a point, yet it is rejected here.
    """
    try:
        raw = decode_base58(address)
    except ValueError:
        return False
    if len(raw) != PUBKEY_LENGTH_BYTES:
        return False
    try:
        return bool(crypto_core_ed25519_is_valid_point(raw))
    except (TypeError, ValueError):
        return False
