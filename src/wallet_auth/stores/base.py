# src/wallet_auth/stores/base.py
"""Store contracts consumed by the authentication services."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from wallet_auth.records import Identity, TokenRecord


class IdentityStore(Protocol):
    """Lookup and nonce persistence for wallet identities."""

    def find_by_address(self, address: str) -> Identity | None: ...

    def find_by_id(self, identity_id: int) -> Identity | None: ...

    def upsert_nonce(self, address: str, nonce: str) -> Identity:
        """Create the identity with the default role if absent, then set its nonce."""
        ...

    def rotate_nonce(self, address: str, expected: str, new: str) -> bool:
        """Replace the nonce only if it still equals ``expected``."""
        ...


class TokenStore(Protocol):
    """Persistence for refresh token records."""

    def create_refresh_record(self, token: str, identity_id: int, expires_at: datetime) -> None: ...

    def find_valid_refresh(self, token: str) -> TokenRecord | None:
        """Return the non-blacklisted refresh record for ``token`` if present."""
        ...

    def blacklist(self, token: str) -> bool:
        """Flag a record so it is no longer accepted, without removing it.

        Backs administrative revocation; returns False when no live record matches.
        """
        ...

    def delete_record(self, token: str) -> bool:
        """Atomically consume a non-blacklisted refresh record.

        Returns True only for the single caller that removed the record.
        """
        ...

    def purge_expired(self, now: datetime) -> int: ...
