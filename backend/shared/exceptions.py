"""
Base exception classes for the Lectern backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to one HTTP status (see api/errors.py).
"""

from typing import Optional, Any


class LecternError(Exception):
    """
    Base exception for all Lectern errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(LecternError):
    """Resource not found."""

    pass


class AlreadyExistsError(LecternError):
    """A unique attribute (username, email, ...) is already taken."""

    pass


class ValidationError(LecternError):
    """Input validation failed."""

    pass


class AuthenticationError(LecternError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(LecternError):
    """Authorization failed (insufficient permissions)."""

    pass


class StorageError(LecternError):
    """A file could not be written, moved or removed."""

    pass


class ServiceTimeoutError(LecternError):
    """An operation did not finish within its time budget."""

    pass


class ExternalServiceError(LecternError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
