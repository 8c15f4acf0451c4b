"""
Authentication and authorization module.

Issues and verifies tokens, hashes passwords, resets passwords and
evaluates access policies.

Public API:
- IAuthService: Interface for auth operations
- TokenClaims / TokenSettings: Token claim set and configuration
- AccessDecision: Result of a policy evaluation
- Auth exceptions: InvalidCredentialsError, MalformedTokenError, etc.
"""

from .interfaces import IAuthService, IResetCodeRepository
from .models import TokenClaims, TokenSettings, TokenVerification
from .exceptions import (
    InvalidCredentialsError,
    MissingTokenError,
    MalformedTokenError,
    BadSignatureError,
    ExpiredTokenError,
    AccessDeniedError,
    InvalidResetCodeError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IResetCodeRepository",
    # Models
    "TokenClaims",
    "TokenSettings",
    "TokenVerification",
    # Exceptions
    "InvalidCredentialsError",
    "MissingTokenError",
    "MalformedTokenError",
    "BadSignatureError",
    "ExpiredTokenError",
    "AccessDeniedError",
    "InvalidResetCodeError",
]
