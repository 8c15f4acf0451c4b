"""
Users module interfaces.

IUserRepository is the credential store contract: unique lookup by id,
username and email, and atomic single-call writes. IUserService is what
the API layer depends on.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from shared.models import Principal
from .models import User, UserCreateRequest, UserUpdateRequest


@runtime_checkable
class IUserRepository(Protocol):
    """Persistence contract for user accounts."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        ...

    def exists_by_username(self, username: str) -> bool:
        ...

    def exists_by_email(self, email: str) -> bool:
        ...

    def list_all(self) -> list[User]:
        ...

    def create(self, data: dict[str, Any]) -> User:
        """
        Insert a user row.

        Raises:
            UsernameAlreadyExistsError: If the username constraint is violated
            EmailAlreadyExistsError: If the email constraint is violated
        """
        ...

    def update(self, user_id: int, data: dict[str, Any]) -> User:
        """
        Update columns of an existing user.

        Raises:
            UserNotFoundError: If no row was updated
            EmailAlreadyExistsError: If the email constraint is violated
        """
        ...

    def delete(self, user_id: int) -> None:
        ...


@runtime_checkable
class IUserService(Protocol):
    """
    Interface for user management operations.

    Every protected operation takes the acting Principal and enforces its
    access policy before reading or mutating state.
    """

    async def register(self, request: UserCreateRequest) -> User:
        """
        Register a new STUDENT account.

        Raises:
            UsernameAlreadyExistsError: Username taken
            EmailAlreadyExistsError: Email taken
        """
        ...

    async def list_users(self, actor: Principal) -> list[User]:
        """List every account. Admin only."""
        ...

    async def get_user(self, actor: Principal, user_id: int) -> User:
        """Get an account. Admin or the account itself."""
        ...

    async def get_me(self, actor: Principal) -> User:
        """Get the acting user's own account."""
        ...

    async def update_user(
        self,
        actor: Principal,
        user_id: int,
        request: UserUpdateRequest,
    ) -> User:
        """Replace email, name and password. Admin or the account itself."""
        ...

    async def delete_user(self, actor: Principal, user_id: int) -> None:
        """Delete an account. Admin or the account itself."""
        ...

    async def assign_role(self, actor: Principal, user_id: int, role: str) -> str:
        """
        Change an account's role to TEACHER or STUDENT.

        Raises:
            RoleNotExistedError: If the role cannot be granted
        """
        ...
