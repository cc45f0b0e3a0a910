"""Shared API dependencies for authentication."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from wallet_auth.core.errors import TokenInvalid
from wallet_auth.core.settings import settings
from wallet_auth.db.session import get_db
from wallet_auth.records import Identity
from wallet_auth.services.auth import AuthService
from wallet_auth.stores.sql import SqlIdentityStore, SqlTokenStore

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_auth_service(db: SessionDep) -> AuthService:
    """Build an AuthService bound to the request's database session."""
    return AuthService(SqlIdentityStore(db), SqlTokenStore(db), settings=settings)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    auth_service: AuthServiceDep,
) -> Identity:
    """Get the identity behind the Bearer access token.

    Raises:
        HTTPException: If the token is missing, invalid, expired, or orphaned.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    try:
        return auth_service.authenticate_access_token(credentials.credentials)
    except TokenInvalid as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err


# Type alias for current identity dependency
CurrentIdentityDep = Annotated[Identity, Depends(get_current_identity)]
