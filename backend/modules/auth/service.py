"""
Authentication service implementation.

Checks credentials against the user store, issues tokens and turns
bearer tokens back into principals.
"""

import logging

from shared.models import Principal
from modules.users.exceptions import UserNotFoundError
from modules.users.interfaces import IUserRepository

from .interfaces import IAuthService
from .models import AuthenticationResponse, IntrospectResponse
from .exceptions import InvalidCredentialsError, MissingTokenError
from .passwords import PasswordHasher
from .tokens import TokenService

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Stateless apart from its collaborators; tokens are never stored.
    """

    def __init__(
        self,
        users: IUserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    async def authenticate(self, username: str, password: str) -> AuthenticationResponse:
        user = self._users.get_by_username(username)
        if user is None:
            logger.info("Login failed: unknown user %s", username)
            raise UserNotFoundError(username)

        if not await self._hasher.verify_async(password, user.password_hash):
            logger.info("Login failed: bad password for %s", username)
            raise InvalidCredentialsError()

        issued = self._tokens.issue(user)
        logger.info("Issued token for %s (role=%s)", user.username, user.role.value)
        return AuthenticationResponse(
            token=issued.token,
            authenticated=True,
            expires_at=issued.expires_at,
        )

    async def introspect(self, token: str) -> IntrospectResponse:
        result = self._tokens.verify(token)
        return IntrospectResponse(valid=result.valid)

    async def get_principal(self, token: str) -> Principal:
        if not token:
            raise MissingTokenError()
        return self._tokens.authenticate(token).to_principal()
