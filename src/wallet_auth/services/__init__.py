# src/wallet_auth/services/__init__.py
"""Business logic services for wallet authentication."""

from .address import is_valid_address
from .auth import AuthService
from .nonce import NonceIssuer, challenge_message
from .signature import SignatureVerifier
from .tokens import TokenIssuer

__all__ = [
    "AuthService",
    "NonceIssuer",
    "SignatureVerifier",
    "TokenIssuer",
    "challenge_message",
    "is_valid_address",
]
