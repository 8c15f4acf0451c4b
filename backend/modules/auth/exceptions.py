"""
Authentication module exceptions.

These exceptions are raised by the auth module and are translated to
HTTP responses by the API error handlers: authentication failures are
401, policy denials are 403.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    LecternError,
    ServiceTimeoutError,
    ValidationError,
)


class InvalidCredentialsError(AuthenticationError):
    """Raised when a password does not match the stored hash."""

    def __init__(self, message: str = "Unauthenticated"):
        super().__init__(message, code="UNAUTHENTICATED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class MalformedTokenError(AuthenticationError):
    """Raised when a token cannot be parsed as a signed JWT."""

    def __init__(self, message: str = "Malformed authentication token"):
        super().__init__(message, code="MALFORMED_TOKEN")


class BadSignatureError(AuthenticationError):
    """Raised when a token's signature does not match its header and payload."""

    def __init__(self, message: str = "Invalid token signature"):
        super().__init__(message, code="BAD_SIGNATURE")


class ExpiredTokenError(AuthenticationError):
    """Raised when a token is past its expiry time."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class TokenConfigurationError(LecternError):
    """Raised when the token service is built without a signing key."""

    def __init__(self, message: str = "JWT signer key is not configured"):
        super().__init__(message, code="TOKEN_NOT_CONFIGURED")


class AccessDeniedError(AuthorizationError):
    """Raised when an authenticated principal is denied by an access policy."""

    def __init__(self, policy: str, username: str, reason: str = ""):
        super().__init__(
            f"Access denied by policy {policy}" + (f": {reason}" if reason else ""),
            code="ACCESS_DENIED",
            details={"policy": policy, "username": username},
        )


class PasswordTooLongError(ValidationError):
    """Raised when a password exceeds bcrypt's 72 byte input limit."""

    def __init__(self, max_bytes: int):
        super().__init__(
            f"Password must be at most {max_bytes} bytes",
            code="PASSWORD_TOO_LONG",
            details={"max_bytes": max_bytes},
        )


class PasswordHashTimeoutError(ServiceTimeoutError):
    """Raised when hashing or verifying a password exceeds its time budget."""

    def __init__(self, timeout: float):
        super().__init__(
            f"Password hashing did not complete within {timeout} seconds",
            code="PASSWORD_HASH_TIMEOUT",
            details={"timeout_seconds": timeout},
        )


class InvalidResetCodeError(ValidationError):
    """Raised when a password reset code is unknown, wrong or expired."""

    def __init__(self, email: str):
        super().__init__(
            "Invalid or expired verification code",
            code="INVALID_VERIFICATION_CODE",
            details={"email": email},
        )
