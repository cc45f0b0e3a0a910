# src/wallet_auth/services/tokens.py
"""JWT issuance and validation for access and refresh tokens."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from wallet_auth.core.errors import TokenInvalid
from wallet_auth.core.settings import Settings, settings as default_settings
from wallet_auth.db.time import utcnow
from wallet_auth.records import Identity, IssuedToken, TokenKind, TokenPair, TokenRecord
from wallet_auth.stores.base import TokenStore

logger = logging.getLogger(__name__)


class TokenIssuer:
    """Mint signed token pairs and validate them against the token store.

    Access tokens are stateless and verified by signature and expiry alone.
    Refresh tokens are additionally recorded so they can be consumed once.
    """

    def __init__(
        self,
        tokens: TokenStore,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.tokens = tokens
        self.settings = settings or default_settings
        self._clock = clock

    def generate_token(self, identity_id: int, expires: datetime, kind: TokenKind) -> str:
        """Return a signed JWT for ``identity_id`` expiring at ``expires``."""
        issued_at = self._clock()
        claims: dict[str, Any] = {
            "sub": str(identity_id),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires.timestamp()),
            "type": kind.value,
            "jti": secrets.token_hex(16),
        }
        encoded: str = jwt.encode(
            claims,
            self.settings.secret_key,
            algorithm=self.settings.jwt_algorithm,
        )
        return encoded

    def issue_pair(self, identity: Identity) -> TokenPair:
        """Mint an access/refresh pair and record the refresh token."""
        now = self._clock().replace(microsecond=0)

        access_expires = now + timedelta(minutes=self.settings.access_token_expire_minutes)
        access_token = self.generate_token(identity.id, access_expires, TokenKind.ACCESS)

        refresh_expires = now + timedelta(days=self.settings.refresh_token_expire_days)
        refresh_token = self.generate_token(identity.id, refresh_expires, TokenKind.REFRESH)
        self.tokens.create_refresh_record(refresh_token, identity.id, refresh_expires)

        logger.debug("Issued token pair for identity %s", identity.id)
        return TokenPair(
            access=IssuedToken(token=access_token, expires=access_expires),
            refresh=IssuedToken(token=refresh_token, expires=refresh_expires),
        )

    def decode(self, token: str, kind: TokenKind) -> int:
        """Verify signature, expiry and kind; return the subject identity id.

        Raises:
            TokenInvalid: If any check fails.
        """
        try:
            payload = jwt.decode(
                token,
                self.settings.secret_key,
                algorithms=[self.settings.jwt_algorithm],
            )
        except JWTError as err:
            raise TokenInvalid() from err

        if payload.get("type") != kind.value:
            raise TokenInvalid()
        subject = payload.get("sub")
        if not isinstance(subject, str):
            raise TokenInvalid()
        try:
            return int(subject)
        except ValueError as err:
            raise TokenInvalid() from err

    def decode_access_token(self, token: str) -> int:
        """Statelessly validate an access token and return its identity id."""
        return self.decode(token, TokenKind.ACCESS)

    def verify_token(self, token: str, kind: TokenKind = TokenKind.REFRESH) -> TokenRecord:
        """Validate ``token`` and return its live server-side record.

        Raises:
            TokenInvalid: If the JWT is invalid or no matching record exists.
        """
        if kind is not TokenKind.REFRESH:
            # Only refresh tokens are persisted.
            raise TokenInvalid()

        identity_id = self.decode(token, kind)
        record = self.tokens.find_valid_refresh(token)
        if record is None or record.identity_id != identity_id:
            raise TokenInvalid()
        if record.expires_at <= self._clock():
            raise TokenInvalid()
        return record
