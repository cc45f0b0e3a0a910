# src/wallet_auth/api/v1/endpoints/auth.py
"""Authentication endpoints for the wallet auth API."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from wallet_auth.api.v1.dependencies import AuthServiceDep, CurrentIdentityDep
from wallet_auth.records import Identity, TokenPair
from wallet_auth.schemas.auth import (
    AuthResponse,
    IdentityResponse,
    LoginRequest,
    NonceRequest,
    NonceResponse,
    RefreshTokenRequest,
    TokenPairResponse,
    TokenSchema,
)

router = APIRouter(prefix="/auth", tags=["authentication"])


def _auth_response(identity: Identity, tokens: TokenPair) -> AuthResponse:
    return AuthResponse(
        user=IdentityResponse.model_validate(identity),
        tokens=TokenPairResponse(
            access=TokenSchema.model_validate(tokens.access),
            refresh=TokenSchema.model_validate(tokens.refresh),
        ),
    )


@router.post(
    "/nonce",
    summary="Issue a wallet signature challenge",
    response_model=NonceResponse,
)
async def request_nonce(payload: NonceRequest, auth_service: AuthServiceDep) -> NonceResponse:
    """Provide a fresh nonce and the exact message the wallet must sign."""
    challenge = auth_service.request_nonce(payload.address)
    return NonceResponse.model_validate(challenge)


@router.post(
    "/login",
    summary="Authenticate with a signed challenge",
    response_model=AuthResponse,
)
async def login(payload: LoginRequest, auth_service: AuthServiceDep) -> AuthResponse:
    """Exchange a valid signature for an access/refresh token pair."""
    identity = auth_service.login(payload.address, payload.signature)
    tokens = auth_service.issue_tokens(identity)
    return _auth_response(identity, tokens)


@router.post(
    "/logout",
    summary="Revoke a refresh token",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def logout(payload: RefreshTokenRequest, auth_service: AuthServiceDep) -> Response:
    """Consume the refresh token so it cannot be used again."""
    auth_service.logout(payload.refresh_token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/refresh-tokens",
    summary="Rotate a refresh token",
    response_model=AuthResponse,
)
async def refresh_tokens(payload: RefreshTokenRequest, auth_service: AuthServiceDep) -> AuthResponse:
    """Trade a refresh token for a new pair; the old token is consumed."""
    result = auth_service.refresh_auth(payload.refresh_token)
    return _auth_response(result.identity, result.tokens)


@router.get(
    "/me",
    summary="Return the authenticated identity",
    response_model=IdentityResponse,
)
async def read_me(identity: CurrentIdentityDep) -> IdentityResponse:
    """Return the identity behind the Bearer access token."""
    return IdentityResponse.model_validate(identity)
