"""
Users module exceptions.
"""

from shared.exceptions import (
    NotFoundError,
    AlreadyExistsError,
    ValidationError,
)


class UserNotFoundError(NotFoundError):
    """Raised when a user does not exist."""

    def __init__(self, identifier: object):
        super().__init__(
            f"User not found: {identifier}",
            code="USER_NOT_EXISTED",
            details={"user": str(identifier)},
        )


class UsernameAlreadyExistsError(AlreadyExistsError):
    """Raised when registering a username that is already taken."""

    def __init__(self, username: str):
        super().__init__(
            f"Username already exists: {username}",
            code="USER_EXISTED",
            details={"username": username},
        )


class EmailAlreadyExistsError(AlreadyExistsError):
    """Raised when an email address is already registered."""

    def __init__(self, email: str):
        super().__init__(
            f"Email already exists: {email}",
            code="EMAIL_EXISTED",
            details={"email": email},
        )


class RoleNotExistedError(ValidationError):
    """Raised when assigning a role that cannot be granted."""

    def __init__(self, role: str):
        super().__init__(
            f"Role not existed: {role}",
            code="ROLE_NOT_EXISTED",
            details={"role": role},
        )
