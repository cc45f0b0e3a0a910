# src/wallet_auth/models/user.py
"""SQLAlchemy models for wallet identities."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wallet_auth.db.session import Base
from wallet_auth.db.time import utcnow
from wallet_auth.records import Role


class User(Base):
    """Identity row keyed by a base-58 encoded Ed25519 public key."""

    __tablename__ = "wallet_user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    address: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    nonce: Mapped[str | None] = mapped_column(String(128), nullable=True)
    role: Mapped[Role] = mapped_column(
        Enum(Role, name="user_role", values_callable=lambda roles: [r.value for r in roles]),
        nullable=False,
        default=Role.USER,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    tokens: Mapped[list["Token"]] = relationship(  # noqa: F821
        "Token",
        back_populates="user",
        cascade="all, delete-orphan",
    )
