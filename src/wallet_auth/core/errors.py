"""Error kinds raised by the authentication core.

Every error carries the HTTP status the transport layer should answer with and
a client-safe ``detail`` string. Messages are fixed so that distinct failure
causes stay indistinguishable to callers where that matters.
"""

from __future__ import annotations

from typing import ClassVar


class AuthError(Exception):
    """Base exception for authentication failures."""

    status_code: ClassVar[int] = 400
    default_detail: ClassVar[str] = "Authentication error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidAddress(AuthError):
    """Raised when an address is malformed or not an Ed25519 curve point."""

    status_code = 400
    default_detail = "Invalid Address"


class InvalidCredentials(AuthError):
    """Raised for an unknown address or a signature that does not verify.

    Both causes share this error and its message.
    """

    status_code = 401
    default_detail = "Invalid Signature"


class NotFound(AuthError):
    """Raised when logout targets a refresh token that is not on record."""

    status_code = 404
    default_detail = "Not found"


class ReAuthenticationRequired(AuthError):
    """Raised for any failure while exchanging a refresh token."""

    status_code = 401
    default_detail = "Please authenticate"


class TokenInvalid(AuthError):
    """Raised when a JWT fails decoding, kind, expiry or record checks."""

    status_code = 401
    default_detail = "Could not validate credentials"
