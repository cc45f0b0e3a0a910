# src/wallet_auth/services/nonce.py
"""Issuance of single-use wallet challenges."""

from __future__ import annotations

import logging
import secrets

from wallet_auth.core.errors import InvalidAddress
from wallet_auth.core.settings import Settings, settings as default_settings
from wallet_auth.services.address import is_valid_address
from wallet_auth.stores.base import IdentityStore

logger = logging.getLogger(__name__)

# Clients sign this text verbatim; any change breaks existing wallets.
CHALLENGE_TEMPLATE = (
    "Welcome!\n\n"
    "Please sign this message to verify ownership of the wallet.\n\n"
    "Unique Access Token: {nonce}"
)


def challenge_message(nonce: str) -> str:
    """Render the challenge message embedding ``nonce``."""
    return CHALLENGE_TEMPLATE.format(nonce=nonce)


def generate_nonce(num_bytes: int = 16) -> str:
    """Return a hex-encoded nonce drawn from the OS CSPRNG."""
    return secrets.token_hex(num_bytes)


class NonceIssuer:
    """Generate and persist a fresh nonce for a wallet address."""

    def __init__(self, identities: IdentityStore, settings: Settings | None = None) -> None:
        self.identities = identities
        self.settings = settings or default_settings

    def new_nonce(self) -> str:
        return generate_nonce(self.settings.nonce_bytes)

    def issue_nonce(self, address: str) -> str:
        """Overwrite the nonce stored for ``address`` and return it.

        Raises:
            InvalidAddress: If the address is not a valid Ed25519 public key.
        """
        if not is_valid_address(address):
            logger.warning("Rejected nonce request for invalid address %r", address)
            raise InvalidAddress()

        nonce = self.new_nonce()
        identity = self.identities.upsert_nonce(address, nonce)
        logger.info("Issued nonce for identity %s (%s)", identity.id, address)
        return nonce
