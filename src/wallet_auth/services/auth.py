# src/wallet_auth/services/auth.py
"""Wallet challenge-response authentication."""

from __future__ import annotations

import logging
from dataclasses import replace

from wallet_auth.core.errors import (
    InvalidCredentials,
    NotFound,
    ReAuthenticationRequired,
    TokenInvalid,
)
from wallet_auth.core.settings import Settings, settings as default_settings
from wallet_auth.records import AuthResult, Identity, NonceChallenge, TokenPair
from wallet_auth.services.nonce import NonceIssuer, challenge_message
from wallet_auth.services.signature import SignatureVerifier
from wallet_auth.services.tokens import TokenIssuer
from wallet_auth.stores.base import IdentityStore, TokenStore

logger = logging.getLogger(__name__)


class AuthService:
    """Orchestrates nonce issuance, login, logout and token refresh.

    Every collaborator is injected; the service holds no state of its own
    beyond references to the stores.
    """

    def __init__(
        self,
        identities: IdentityStore,
        tokens: TokenStore,
        *,
        settings: Settings | None = None,
        token_issuer: TokenIssuer | None = None,
        verifier: SignatureVerifier | None = None,
    ) -> None:
        self.identities = identities
        self.tokens = tokens
        self.settings = settings or default_settings
        self.nonce_issuer = NonceIssuer(identities, self.settings)
        self.token_issuer = token_issuer or TokenIssuer(tokens, self.settings)
        self.verifier = verifier or SignatureVerifier()

    def request_nonce(self, address: str) -> NonceChallenge:
        """Issue a fresh nonce for ``address`` along with the text to sign."""
        nonce = self.nonce_issuer.issue_nonce(address)
        return NonceChallenge(address=address, nonce=nonce, message=challenge_message(nonce))

    def login(self, address: str, signature: str) -> Identity:
        """Authenticate ``address`` by its signature over the stored nonce.

        Raises:
            InvalidCredentials: If the address is unknown or the signature fails.
        """
        identity = self.identities.find_by_address(address)
        if identity is None:
            logger.warning("Login attempt for unknown address %s", address)
            raise InvalidCredentials()

        if not self.verifier.verify(identity, signature):
            logger.warning("Signature verification failed for identity %s", identity.id)
            raise InvalidCredentials()

        if self.settings.rotate_nonce_on_login:
            fresh = self.nonce_issuer.new_nonce()
            if not self.identities.rotate_nonce(address, identity.nonce or "", fresh):
                # The nonce changed after verification, so this signature is stale.
                logger.warning("Nonce for identity %s changed during login", identity.id)
                raise InvalidCredentials()
            identity = replace(identity, nonce=fresh)

        logger.info("Identity %s logged in", identity.id)
        return identity

    def issue_tokens(self, identity: Identity) -> TokenPair:
        """Mint an access/refresh pair for an authenticated identity."""
        return self.token_issuer.issue_pair(identity)

    def logout(self, refresh_token: str) -> None:
        """Consume ``refresh_token`` so it can no longer be used.

        Raises:
            NotFound: If no live refresh record matches the token.
        """
        if not self.tokens.delete_record(refresh_token):
            raise NotFound()
        logger.info("Refresh token revoked via logout")

    def revoke_refresh_token(self, refresh_token: str) -> None:
        """Blacklist a refresh token on an administrator's behalf.

        Unlike logout the record is kept, flagged so that neither refresh nor
        logout accepts it again.

        Raises:
            NotFound: If no live refresh record matches the token.
        """
        if not self.tokens.blacklist(refresh_token):
            raise NotFound()
        logger.info("Refresh token blacklisted")

    def refresh_auth(self, refresh_token: str) -> AuthResult:
        """Exchange a refresh token for a new pair, consuming the old one.

        Raises:
            ReAuthenticationRequired: On any failure, whatever its cause.
        """
        try:
            record = self.token_issuer.verify_token(refresh_token)
            identity = self.identities.find_by_id(record.identity_id)
            if identity is None:
                raise TokenInvalid()
            if not self.tokens.delete_record(refresh_token):
                raise TokenInvalid()
            tokens = self.token_issuer.issue_pair(identity)
        except Exception as err:
            logger.warning("Refresh rejected: %s", type(err).__name__)
            raise ReAuthenticationRequired() from err

        logger.info("Refreshed tokens for identity %s", identity.id)
        return AuthResult(identity=identity, tokens=tokens)

    def authenticate_access_token(self, access_token: str) -> Identity:
        """Resolve the identity behind a stateless access token.

        Raises:
            TokenInvalid: If the token fails validation or its identity is gone.
        """
        identity_id = self.token_issuer.decode_access_token(access_token)
        identity = self.identities.find_by_id(identity_id)
        if identity is None:
            raise TokenInvalid()
        return identity
