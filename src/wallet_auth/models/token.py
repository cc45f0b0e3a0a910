# src/wallet_auth/models/token.py
"""SQLAlchemy model for persisted refresh tokens."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wallet_auth.db.session import Base
from wallet_auth.db.time import utcnow
from wallet_auth.records import TokenKind


class Token(Base):
    """Issued token tracked server-side so it can be revoked or consumed."""

    __tablename__ = "auth_token"

    token: Mapped[str] = mapped_column(Text, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("wallet_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    kind: Mapped[TokenKind] = mapped_column(
        Enum(TokenKind, name="token_kind", values_callable=lambda kinds: [k.value for k in kinds]),
        nullable=False,
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    blacklisted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    user: Mapped["User"] = relationship("User", back_populates="tokens")  # noqa: F821
