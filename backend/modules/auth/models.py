"""
Authentication module data models.

These models define the token claim set, verification results and the
request/response bodies of the auth endpoints.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from pydantic import AliasChoices, BaseModel, EmailStr, Field

from shared.models import Principal, Role


@dataclass(frozen=True)
class TokenSettings:
    """
    Immutable token configuration, built once at startup.

    The signer key is the single shared secret for the process lifetime.
    """

    signer_key: str
    issuer: str
    ttl_seconds: int = 3600
    algorithm: str = "HS512"


class TokenClaims(BaseModel):
    """
    Decoded JWT claim set.

    `iat` and `exp` are NumericDate values (seconds since the epoch).
    """

    sub: str = Field(..., description="Subject (username)")
    iss: str = Field(..., description="Issuer")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
    scope: Role = Field(..., description="Role scope")

    model_config = {"frozen": True}

    def to_principal(self) -> Principal:
        return Principal(
            username=self.sub,
            role=self.scope,
            issued_at=datetime.fromtimestamp(self.iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(self.exp, tz=timezone.utc),
        )


class IssuedToken(BaseModel):
    """A freshly signed token with its validity window."""

    token: str
    issued_at: datetime
    expires_at: datetime


class TokenVerification(BaseModel):
    """
    Result of verifying a token.

    Signature and expiry are checked independently; `valid` combines them.
    """

    signature_valid: bool
    expired: bool
    claims: Optional[TokenClaims] = None

    @property
    def valid(self) -> bool:
        return self.signature_valid and not self.expired


class AuthenticationRequest(BaseModel):
    """Login request."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthenticationResponse(BaseModel):
    """Login response."""

    token: str
    authenticated: bool
    expires_at: Optional[datetime] = None


class IntrospectRequest(BaseModel):
    """Request to check a token without calling a protected endpoint."""

    token: str = Field(..., description="JWT token to validate")


class IntrospectResponse(BaseModel):
    """Response from token introspection."""

    valid: bool = Field(..., description="Whether the token is valid")


class ForgotPasswordRequest(BaseModel):
    """Request a verification code for a password reset."""

    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Redeem a verification code and set a new password."""

    email: EmailStr
    code: str = Field(..., min_length=1, max_length=32)
    new_password: str = Field(
        ...,
        min_length=3,
        max_length=72,
        validation_alias=AliasChoices("new_password", "newPassword"),
    )


class PasswordResetCode(BaseModel):
    """A stored password reset code."""

    email: str
    code: str
    expires_at: datetime
    created_at: Optional[datetime] = None
