# src/wallet_auth/records.py
"""Plain data records exchanged between the services and the stores."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    """Roles an identity can hold."""

    USER = "user"
    ADMIN = "admin"


class TokenKind(str, Enum):
    """Kinds of JWT minted by the token issuer."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True)
class Identity:
    """A wallet identity keyed by its base-58 Ed25519 address."""

    id: int
    address: str
    nonce: str | None = None
    role: Role = Role.USER


@dataclass(frozen=True)
class TokenRecord:
    """Server-side record of an issued token."""

    token: str
    identity_id: int
    kind: TokenKind
    expires_at: datetime
    blacklisted: bool = False


@dataclass(frozen=True)
class IssuedToken:
    """A minted token together with its absolute expiry."""

    token: str
    expires: datetime


@dataclass(frozen=True)
class TokenPair:
    """Access and refresh tokens returned after authentication."""

    access: IssuedToken
    refresh: IssuedToken


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful refresh: the identity and its new tokens."""

    identity: Identity
    tokens: TokenPair


@dataclass(frozen=True)
class NonceChallenge:
    """Challenge material handed to a client for signing."""

    address: str
    nonce: str
    message: str
