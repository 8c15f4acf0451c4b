"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and keeps the HTTP layer free of token logic.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from shared.models import Principal
from .models import AuthenticationResponse, IntrospectResponse, PasswordResetCode


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer and other modules.
    """

    async def authenticate(self, username: str, password: str) -> AuthenticationResponse:
        """
        Check credentials and issue a token.

        Args:
            username: Login name
            password: Plaintext password

        Returns:
            AuthenticationResponse with the signed token

        Raises:
            UserNotFoundError: If the username is unknown
            InvalidCredentialsError: If the password does not match
        """
        ...

    async def introspect(self, token: str) -> IntrospectResponse:
        """
        Report whether a token has a valid signature and is not expired.

        Raises:
            MalformedTokenError: If the token cannot be parsed
        """
        ...

    async def get_principal(self, token: str) -> Principal:
        """
        Verify a bearer token and return the identity it carries.

        Raises:
            AuthenticationError: If the token is missing, malformed,
                tampered with or expired
        """
        ...


@runtime_checkable
class IResetCodeRepository(Protocol):
    """Persistence contract for password reset codes."""

    def save(self, email: str, code: str, expires_at: datetime) -> PasswordResetCode:
        ...

    def get(self, email: str) -> Optional[PasswordResetCode]:
        ...

    def delete(self, email: str) -> None:
        ...

    def consume(self, email: str, code: str) -> Optional[PasswordResetCode]:
        """
        Delete the code for an email if it still matches.

        Returns:
            The deleted code, or None if another caller consumed it first
        """
        ...
