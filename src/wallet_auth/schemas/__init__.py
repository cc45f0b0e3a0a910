# src/wallet_auth/schemas/__init__.py
"""Pydantic schemas for the wallet authentication API."""

from .auth import (
    AuthResponse,
    IdentityResponse,
    LoginRequest,
    NonceRequest,
    NonceResponse,
    RefreshTokenRequest,
    TokenPairResponse,
    TokenSchema,
)

__all__ = [
    "AuthResponse",
    "IdentityResponse",
    "LoginRequest",
    "NonceRequest",
    "NonceResponse",
    "RefreshTokenRequest",
    "TokenPairResponse",
    "TokenSchema",
]
