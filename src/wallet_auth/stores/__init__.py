# src/wallet_auth/stores/__init__.py
"""Identity and token stores."""

from .base import IdentityStore, TokenStore
from .memory import InMemoryIdentityStore, InMemoryTokenStore
from .sql import SqlIdentityStore, SqlTokenStore

__all__ = [
    "IdentityStore", "TokenStore",
    "InMemoryIdentityStore", "InMemoryTokenStore",
    "SqlIdentityStore", "SqlTokenStore",
]
