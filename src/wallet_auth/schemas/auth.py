"""Authentication-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from wallet_auth.records import Role

# Upper bounds well above any valid value; base-58 decoding is quadratic in length.
MAX_ADDRESS_LENGTH = 64
MAX_SIGNATURE_LENGTH = 128
MAX_TOKEN_LENGTH = 2048


class NonceRequest(BaseModel):
    """Request a challenge nonce for a wallet address."""

    address: str = Field(
        ...,
        min_length=1,
        max_length=MAX_ADDRESS_LENGTH,
        description="Base-58 encoded Ed25519 public key",
    )


class NonceResponse(BaseModel):
    """Challenge material the client must sign."""

    address: str = Field(..., description="Address the nonce was issued for")
    nonce: str = Field(..., description="Single-use hex nonce")
    message: str = Field(..., description="Exact message text to sign")

    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    """Signed challenge submitted to log in."""

    address: str = Field(
        ...,
        min_length=1,
        max_length=MAX_ADDRESS_LENGTH,
        description="Base-58 encoded Ed25519 public key",
    )
    signature: str = Field(
        ...,
        min_length=1,
        max_length=MAX_SIGNATURE_LENGTH,
        description="Base-58 encoded detached signature",
    )


class RefreshTokenRequest(BaseModel):
    """Body carrying a refresh token for logout or refresh."""

    refresh_token: str = Field(
        ..., min_length=1, max_length=MAX_TOKEN_LENGTH, description="Refresh JWT"
    )


class TokenSchema(BaseModel):
    """A single token and its absolute expiry."""

    token: str
    expires: datetime

    model_config = ConfigDict(from_attributes=True)


class TokenPairResponse(BaseModel):
    """Access and refresh tokens."""

    access: TokenSchema
    refresh: TokenSchema

    model_config = ConfigDict(from_attributes=True)


class IdentityResponse(BaseModel):
    """Public view of an identity; the nonce is never exposed."""

    id: int
    address: str
    role: Role

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Identity plus freshly issued tokens."""

    user: IdentityResponse
    tokens: TokenPairResponse
