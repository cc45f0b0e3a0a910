# src/wallet_auth/stores/memory.py
"""In-process stores for tests and embedded use."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from itertools import count
from threading import Lock

from wallet_auth.records import Identity, Role, TokenKind, TokenRecord


class InMemoryIdentityStore:
    """Identity store backed by a dict keyed on address."""

    def __init__(self) -> None:
        self._by_address: dict[str, Identity] = {}
        self._ids = count(1)
        self._lock = Lock()

    def find_by_address(self, address: str) -> Identity | None:
        with self._lock:
            return self._by_address.get(address)

    def find_by_id(self, identity_id: int) -> Identity | None:
        with self._lock:
            for identity in self._by_address.values():
                if identity.id == identity_id:
                    return identity
        return None

    def upsert_nonce(self, address: str, nonce: str) -> Identity:
        with self._lock:
            existing = self._by_address.get(address)
            if existing is None:
                identity = Identity(id=next(self._ids), address=address, nonce=nonce, role=Role.USER)
            else:
                identity = replace(existing, nonce=nonce)
            self._by_address[address] = identity
            return identity

    def rotate_nonce(self, address: str, expected: str, new: str) -> bool:
        with self._lock:
            existing = self._by_address.get(address)
            if existing is None or existing.nonce != expected:
                return False
            self._by_address[address] = replace(existing, nonce=new)
            return True


class InMemoryTokenStore:
    """Token store backed by a dict keyed on the raw token value."""

    def __init__(self) -> None:
        self._records: dict[str, TokenRecord] = {}
        self._lock = Lock()

    def create_refresh_record(self, token: str, identity_id: int, expires_at: datetime) -> None:
        with self._lock:
            self._records[token] = TokenRecord(
                token=token,
                identity_id=identity_id,
                kind=TokenKind.REFRESH,
                expires_at=expires_at,
            )

    def blacklist(self, token: str) -> bool:
        with self._lock:
            record = self._records.get(token)
            if record is None or record.blacklisted:
                return False
            self._records[token] = replace(record, blacklisted=True)
            return True

    def find_valid_refresh(self, token: str) -> TokenRecord | None:
        with self._lock:
            record = self._records.get(token)
        if record is None or record.kind is not TokenKind.REFRESH or record.blacklisted:
            return None
        return record

    def delete_record(self, token: str) -> bool:
        with self._lock:
            record = self._records.get(token)
            if record is None or record.kind is not TokenKind.REFRESH or record.blacklisted:
                return False
            del self._records[token]
            return True

    def purge_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [token for token, record in self._records.items() if record.expires_at <= now]
            for token in expired:
                del self._records[token]
        return len(expired)
