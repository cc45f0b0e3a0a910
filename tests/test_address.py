# tests/test_address.py
"""Tests for wallet address validation."""

from __future__ import annotations

import hashlib

import base58
import pytest

from tests.conftest import generate_wallet
from wallet_auth.services.address import decode_base58, is_valid_address

# Curve25519 field prime and the twisted Edwards constant d.
_P = 2**255 - 19
_D = (-121665 * pow(121666, _P - 2, _P)) % _P


def _is_on_curve(encoded: bytes) -> bool:
    """Independent decompressibility check: does some x satisfy the curve equation?"""
    y = int.from_bytes(encoded, "little") & ((1 << 255) - 1)
    if y >= _P:
        return False
    u = (y * y - 1) % _P
    v = (_D * y * y + 1) % _P
    x2 = u * pow(v, _P - 2, _P) % _P
    return x2 == 0 or pow(x2, (_P - 1) // 2, _P) == 1


def _off_curve_bytes() -> bytes:
    for i in range(256):
        candidate = bytearray(hashlib.sha256(f"off-curve-{i}".encode()).digest())
        candidate[31] &= 0x7F
        if not _is_on_curve(bytes(candidate)):
            return bytes(candidate)
    raise AssertionError("no off-curve candidate found")


def test_generated_wallets_are_valid() -> None:
    for _ in range(20):
        assert is_valid_address(generate_wallet()["address"]) is True


def test_off_curve_point_is_rejected() -> None:
    raw = _off_curve_bytes()
    address = base58.b58encode(raw).decode()
    assert len(decode_base58(address)) == 32
    assert is_valid_address(address) is False


def test_small_order_identity_point_is_rejected() -> None:
    # y = 1 encodes the neutral element, which decodes but cannot be a signing key.
    identity_point = (1).to_bytes(32, "little")
    assert is_valid_address(base58.b58encode(identity_point).decode()) is False


@pytest.mark.parametrize(
    "address",
    [
        "",
        "   ",
        "0OIl",  # characters outside the base-58 alphabet
        "not a wallet address!",
        "ümlaut",
        base58.b58encode(b"\x01" * 31).decode(),
        base58.b58encode(b"\x01" * 33).decode(),
        base58.b58encode(b"\x01" * 64).decode(),
    ],
)
def test_malformed_addresses_are_rejected(address: str) -> None:
    assert is_valid_address(address) is False


def test_non_string_input_is_rejected() -> None:
    assert is_valid_address(None) is False  # type: ignore[arg-type]
    assert is_valid_address(b"abc") is False  # type: ignore[arg-type]


def test_decode_base58_raises_value_error() -> None:
    with pytest.raises(ValueError):
        decode_base58("0")
    with pytest.raises(ValueError):
        decode_base58("")


def test_all_zero_key_is_rejected() -> None:
    # Decompresses to (sqrt(-1), 0), an order-4 point; Solana's isOnCurve accepts it.
    address = "1" * 32
    assert decode_base58(address) == bytes(32)
    assert _is_on_curve(bytes(32)) is True
    assert is_valid_address(address) is False
