"""
User repository for database access.

Encapsulates all Supabase queries and data mapping for the `users` table.
Uniqueness of username and email is enforced by the table constraints
`users_username_key` and `users_email_key`; a violation is translated to
the matching domain error so a concurrent duplicate registration fails the
same way as a sequential one.
"""

import logging
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.models import Role
from shared.repository import BaseRepository
from .exceptions import (
    EmailAlreadyExistsError,
    UserNotFoundError,
    UsernameAlreadyExistsError,
)
from .models import User

logger = logging.getLogger(__name__)

USERS_TABLE = "users"
USERNAME_CONSTRAINT = "users_username_key"
EMAIL_CONSTRAINT = "users_email_key"


class UserRepository(BaseRepository[User]):
    """
    Repository for user account data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for enforcing access policies.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        result = self._db.table(USERS_TABLE).select("*").eq("id", user_id).execute()
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        result = self._db.table(USERS_TABLE).select("*").eq("username", username).execute()
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        result = self._db.table(USERS_TABLE).select("*").eq("email", email).execute()
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    def exists_by_username(self, username: str) -> bool:
        result = self._db.table(USERS_TABLE).select("id").eq("username", username).execute()
        return bool(result.data)

    def exists_by_email(self, email: str) -> bool:
        result = self._db.table(USERS_TABLE).select("id").eq("email", email).execute()
        return bool(result.data)

    def list_all(self) -> list[User]:
        result = self._db.table(USERS_TABLE).select("*").order("id").execute()
        return [self._map_to_user(row) for row in result.data]

    def create(self, data: dict[str, Any]) -> User:
        """
        Insert a user row.

        Args:
            data: Column values (username, email, password_hash, role, ...)

        Returns:
            Created User with generated ID and timestamps.
        """
        try:
            result = self._db.table(USERS_TABLE).insert(data).execute()
        except APIError as e:
            self._raise_conflict(e, data)
            raise
        return self._map_to_user(result.data[0])

    def update(self, user_id: int, data: dict[str, Any]) -> User:
        try:
            result = self._db.table(USERS_TABLE).update(data).eq("id", user_id).execute()
        except APIError as e:
            self._raise_conflict(e, data)
            raise
        row = self._first(result.data)
        if row is None:
            raise UserNotFoundError(user_id)
        return self._map_to_user(row)

    def delete(self, user_id: int) -> None:
        self._db.table(USERS_TABLE).delete().eq("id", user_id).execute()

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _raise_conflict(self, error: APIError, data: dict[str, Any]) -> None:
        """Translate a unique violation into the matching domain error."""
        if self._is_unique_violation(error, USERNAME_CONSTRAINT):
            logger.info("Username constraint rejected write for %s", data.get("username"))
            raise UsernameAlreadyExistsError(str(data.get("username", ""))) from error
        if self._is_unique_violation(error, EMAIL_CONSTRAINT):
            logger.info("Email constraint rejected write for %s", data.get("email"))
            raise EmailAlreadyExistsError(str(data.get("email", ""))) from error

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=int(data["id"]),
            username=data["username"],
            email=data["email"],
            full_name=data.get("full_name"),
            password_hash=data["password_hash"],
            role=Role(data.get("role") or Role.STUDENT.value),
            balance=float(data.get("balance") or 0.0),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
