"""
Users module data models.

`User` is the stored identity (credential store row). Request and
response models define what the API accepts and returns; the password
hash never leaves the service layer.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from shared.models import Role


# Roles that can be granted through assign_role. ADMIN accounts are
# bootstrapped with create_admin.py.
ASSIGNABLE_ROLES = (Role.TEACHER, Role.STUDENT)


class User(BaseModel):
    """A registered account as stored in the `users` table."""

    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    password_hash: str
    role: Role = Role.STUDENT
    balance: float = 0.0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserCreateRequest(BaseModel):
    """Registration payload."""

    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        pattern=r"^[A-Za-z0-9_.-]+$",
        description="Unique login name",
    )
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., min_length=3, max_length=72, description="Plaintext password")
    full_name: Optional[str] = Field(None, max_length=100)


class UserUpdateRequest(BaseModel):
    """Profile update payload (email, name and password are replaced)."""

    email: EmailStr
    full_name: Optional[str] = Field(None, max_length=100)
    password: str = Field(..., min_length=3, max_length=72)


class AssignRoleRequest(BaseModel):
    """Role assignment payload. Kept as a plain string so unknown roles reach the service."""

    role: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """User data returned to clients (no password hash)."""

    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    role: Role
    balance: float
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            balance=user.balance,
            created_at=user.created_at,
        )


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
