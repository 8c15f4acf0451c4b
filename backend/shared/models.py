"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Role(str, Enum):
    """Account roles. Serialized as the upper-case name in tokens and rows."""

    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    STUDENT = "STUDENT"


class Principal(BaseModel):
    """
    The identity acting on a request.

    Built from a verified token: `username` is the `sub` claim and `role`
    is the `scope` claim. Made available to route handlers via dependency
    injection and passed into every protected service call.
    """

    username: str = Field(..., description="Token subject")
    role: Role = Field(..., description="Role scope carried by the token")
    issued_at: Optional[datetime] = Field(None, description="Token issue time")
    expires_at: Optional[datetime] = Field(None, description="Token expiry time")

    model_config = {
        "frozen": True,  # Make immutable for safety
    }

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
