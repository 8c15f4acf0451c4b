"""
User management service.

Registration, profile reads and updates, deletion and role assignment.
Every protected method asks the AccessPolicyEngine before touching the
store.
"""

import logging
from datetime import datetime, timezone

from shared.models import Principal, Role
from modules.auth.passwords import PasswordHasher
from modules.auth.policies import AccessPolicyEngine

from .interfaces import IUserRepository, IUserService
from .models import ASSIGNABLE_ROLES, User, UserCreateRequest, UserUpdateRequest
from .exceptions import (
    EmailAlreadyExistsError,
    RoleNotExistedError,
    UserNotFoundError,
    UsernameAlreadyExistsError,
)

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """User service backed by an IUserRepository."""

    def __init__(
        self,
        repository: IUserRepository,
        hasher: PasswordHasher,
        policies: AccessPolicyEngine,
    ):
        self._users = repository
        self._hasher = hasher
        self._policies = policies

    async def register(self, request: UserCreateRequest) -> User:
        """
        Register a STUDENT account with a zero balance.

        The existence checks give early, specific errors; the store's
        unique constraints still reject a concurrent duplicate that slips
        between the check and the insert.
        """
        if self._users.exists_by_username(request.username):
            raise UsernameAlreadyExistsError(request.username)
        if self._users.exists_by_email(request.email):
            raise EmailAlreadyExistsError(request.email)

        password_hash = await self._hasher.hash_async(request.password)
        user = self._users.create({
            "username": request.username,
            "email": request.email,
            "full_name": request.full_name,
            "password_hash": password_hash,
            "role": Role.STUDENT.value,
            "balance": 0.0,
        })
        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    async def list_users(self, actor: Principal) -> list[User]:
        self._policies.authorize_admin(actor)
        return self._users.list_all()

    async def get_user(self, actor: Principal, user_id: int) -> User:
        self._policies.authorize_admin_or_self(actor, user_id)
        return self._require(user_id)

    async def get_me(self, actor: Principal) -> User:
        return self._policies.resolve_actor(actor)

    async def update_user(
        self,
        actor: Principal,
        user_id: int,
        request: UserUpdateRequest,
    ) -> User:
        self._policies.authorize_admin_or_self(actor, user_id)
        user = self._require(user_id)

        if request.email != user.email and self._users.exists_by_email(request.email):
            raise EmailAlreadyExistsError(request.email)

        password_hash = await self._hasher.hash_async(request.password)
        return self._users.update(user.id, {
            "email": request.email,
            "full_name": request.full_name,
            "password_hash": password_hash,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        })

    async def delete_user(self, actor: Principal, user_id: int) -> None:
        self._policies.authorize_admin_or_self(actor, user_id)
        self._require(user_id)
        self._users.delete(user_id)
        logger.info("User %s deleted by %s", user_id, actor.username)

    async def assign_role(self, actor: Principal, user_id: int, role: str) -> str:
        self._policies.authorize_admin_or_self(actor, user_id)

        if role not in {r.value for r in ASSIGNABLE_ROLES}:
            raise RoleNotExistedError(role)

        user = self._require(user_id)
        self._users.update(user.id, {
            "role": role,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        })
        logger.info(
            "Role of %s changed from %s to %s by %s",
            user.username,
            user.role.value,
            role,
            actor.username,
        )
        return f"Change role to {role} completed!"

    def _require(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user
