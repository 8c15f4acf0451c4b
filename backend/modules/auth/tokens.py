"""
Token issuance and verification.

Tokens are HS512-signed JWTs carrying the username (`sub`), the issuer
(`iss`), issue and expiry times (`iat`, `exp`) and the role (`scope`).
They are self-contained: nothing is stored server side, and expiry is the
only way a token stops being valid.

PyJWT recomputes and compares the signature; expiry is checked here
against an injectable clock so signature and expiry results stay
independent of each other.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from modules.users.models import User
from .exceptions import (
    BadSignatureError,
    ExpiredTokenError,
    MalformedTokenError,
    TokenConfigurationError,
)
from .models import IssuedToken, TokenClaims, TokenSettings, TokenVerification

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "iss", "iat", "exp", "scope"]

# Time checks are done by TokenService against its own clock
_DECODE_OPTIONS: dict[str, Any] = {
    "verify_exp": False,
    "verify_iat": False,
    "verify_nbf": False,
    "require": REQUIRED_CLAIMS,
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Issues and verifies signed, time-bounded identity tokens.

    Stateless: the only inputs are the immutable TokenSettings, the clock
    and the token itself, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        settings: TokenSettings,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not settings.signer_key:
            raise TokenConfigurationError()
        self._settings = settings
        self._clock = clock or utc_now

    @property
    def settings(self) -> TokenSettings:
        return self._settings

    def issue(self, user: User) -> IssuedToken:
        """
        Sign a token for a user.

        Args:
            user: The authenticated account

        Returns:
            IssuedToken with the compact JWT and its validity window
        """
        issued_at = int(self._clock().timestamp())
        expires_at = issued_at + self._settings.ttl_seconds

        payload = {
            "sub": user.username,
            "iss": self._settings.issuer,
            "iat": issued_at,
            "exp": expires_at,
            "scope": user.role.value,
        }
        token = jwt.encode(
            payload,
            self._settings.signer_key,
            algorithm=self._settings.algorithm,
        )

        return IssuedToken(
            token=token,
            issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
        )

    def verify(self, token: str) -> TokenVerification:
        """
        Verify signature and expiry of a token.

        A bad signature does not raise; it is reported through
        `signature_valid`, and `claims` is left empty because they
        cannot be trusted.

        Raises:
            MalformedTokenError: If the token is not a well-formed JWT
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.signer_key,
                algorithms=[self._settings.algorithm],
                options=_DECODE_OPTIONS,
            )
        except jwt.InvalidSignatureError:
            unverified = self._decode_unverified(token)
            return TokenVerification(
                signature_valid=False,
                expired=self._is_expired(unverified.exp),
            )
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(f"Malformed token: {e}")

        claims = self._to_claims(payload)
        return TokenVerification(
            signature_valid=True,
            expired=self._is_expired(claims.exp),
            claims=claims,
        )

    def authenticate(self, token: str) -> TokenClaims:
        """
        Verify a token and return its claims, raising on any failure.

        Raises:
            MalformedTokenError: Token cannot be parsed
            BadSignatureError: Signature mismatch
            ExpiredTokenError: Token is past its expiry time
        """
        result = self.verify(token)
        if not result.signature_valid:
            raise BadSignatureError()
        if result.expired or result.claims is None:
            raise ExpiredTokenError()
        return result.claims

    def _is_expired(self, exp: int) -> bool:
        return self._clock().timestamp() >= exp

    def _decode_unverified(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                options={**_DECODE_OPTIONS, "verify_signature": False},
            )
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(f"Malformed token: {e}")
        return self._to_claims(payload)

    @staticmethod
    def _to_claims(payload: dict[str, Any]) -> TokenClaims:
        try:
            return TokenClaims(**payload)
        except PydanticValidationError as e:
            raise MalformedTokenError(f"Malformed token claims: {e.error_count()} invalid field(s)")
