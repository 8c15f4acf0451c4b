"""
Users module.

Registration, profile management and role assignment.

Public API:
- IUserService / IUserRepository: Service and store interfaces
- User, UserResponse: Stored account and its public view
- User exceptions: UserNotFoundError, UsernameAlreadyExistsError, etc.
"""

from .interfaces import IUserRepository, IUserService
from .models import User, UserResponse, UserCreateRequest, UserUpdateRequest
from .exceptions import (
    UserNotFoundError,
    UsernameAlreadyExistsError,
    EmailAlreadyExistsError,
    RoleNotExistedError,
)

__all__ = [
    "IUserRepository",
    "IUserService",
    "User",
    "UserResponse",
    "UserCreateRequest",
    "UserUpdateRequest",
    "UserNotFoundError",
    "UsernameAlreadyExistsError",
    "EmailAlreadyExistsError",
    "RoleNotExistedError",
]
