# src/wallet_auth/stores/sql.py
"""SQLAlchemy-backed stores operating on an injected session."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wallet_auth.db.time import as_utc
from wallet_auth.models import Token, User
from wallet_auth.records import Identity, Role, TokenKind, TokenRecord

logger = logging.getLogger(__name__)


def _to_identity(user: User) -> Identity:
    return Identity(id=user.id, address=user.address, nonce=user.nonce, role=Role(user.role))


def _to_token_record(token: Token) -> TokenRecord:
    return TokenRecord(
        token=token.token,
        identity_id=token.user_id,
        kind=TokenKind(token.kind),
        expires_at=as_utc(token.expires_at),
        blacklisted=token.blacklisted,
    )


class SqlIdentityStore:
    """Identity store persisting to the ``wallet_user`` table.

    Writes are committed immediately so each store call is its own unit of work.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_address(self, address: str) -> Identity | None:
        user = self.db.execute(select(User).where(User.address == address)).scalar_one_or_none()
        return _to_identity(user) if user is not None else None

    def find_by_id(self, identity_id: int) -> Identity | None:
        user = self.db.get(User, identity_id)
        return _to_identity(user) if user is not None else None

    def upsert_nonce(self, address: str, nonce: str) -> Identity:
        result = self.db.execute(
            update(User).where(User.address == address).values(nonce=nonce)
        )
        if result.rowcount == 0:
            try:
                self.db.add(User(address=address, nonce=nonce, role=Role.USER))
                self.db.flush()
            except IntegrityError:
                # Another request created the row first; fall back to updating it.
                self.db.rollback()
                self.db.execute(update(User).where(User.address == address).values(nonce=nonce))
            else:
                logger.debug("Created identity row for %s", address)
        self.db.commit()
        user = self.db.execute(select(User).where(User.address == address)).scalar_one()
        self.db.refresh(user)
        return _to_identity(user)

    def rotate_nonce(self, address: str, expected: str, new: str) -> bool:
        result = self.db.execute(
            update(User)
            .where(User.address == address, User.nonce == expected)
            .values(nonce=new)
        )
        self.db.commit()
        return result.rowcount == 1


class SqlTokenStore:
    """Token store persisting refresh tokens to the ``auth_token`` table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create_refresh_record(self, token: str, identity_id: int, expires_at: datetime) -> None:
        self.db.add(
            Token(
                token=token,
                user_id=identity_id,
                kind=TokenKind.REFRESH,
                expires_at=expires_at,
                blacklisted=False,
            )
        )
        self.db.commit()

    def find_valid_refresh(self, token: str) -> TokenRecord | None:
        row = self.db.execute(
            select(Token).where(
                Token.token == token,
                Token.kind == TokenKind.REFRESH,
                Token.blacklisted.is_(False),
            )
        ).scalar_one_or_none()
        return _to_token_record(row) if row is not None else None

    def blacklist(self, token: str) -> bool:
        result = self.db.execute(
            update(Token)
            .where(Token.token == token, Token.blacklisted.is_(False))
            .values(blacklisted=True)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount == 1

    def delete_record(self, token: str) -> bool:
        # A single conditional DELETE; the row count tells which caller won.
        result = self.db.execute(
            delete(Token)
            .where(
                Token.token == token,
                Token.kind == TokenKind.REFRESH,
                Token.blacklisted.is_(False),
            )
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount == 1

    def purge_expired(self, now: datetime) -> int:
        result = self.db.execute(
            delete(Token)
            .where(Token.expires_at <= now)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount
