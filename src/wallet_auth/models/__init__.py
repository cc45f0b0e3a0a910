# src/wallet_auth/models/__init__.py
"""SQLAlchemy models for the wallet authentication service."""

from .token import Token
from .user import User

__all__ = ["Token", "User"]
