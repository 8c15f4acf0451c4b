"""
Exception handlers.

Translates domain exceptions into HTTP responses in one place. Each
shared exception base maps to one status; anything unexpected is logged
with its traceback and answered with a generic 500 that leaks nothing.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from shared.exceptions import (
    AlreadyExistsError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    LecternError,
    NotFoundError,
    ServiceTimeoutError,
    StorageError,
    ValidationError,
)
from .models.errors import ErrorResponse

logger = logging.getLogger(__name__)

# Checked in order; the first matching base class wins
STATUS_BY_ERROR: list[tuple[type[LecternError], int]] = [
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AlreadyExistsError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ServiceTimeoutError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ExternalServiceError, status.HTTP_502_BAD_GATEWAY),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(error: LecternError) -> int:
    """HTTP status for a domain exception."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_lectern_error(request: Request, exc: LecternError) -> JSONResponse:
    status_code = status_for(exc)
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    if status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    body = ErrorResponse(error="INTERNAL_ERROR", message="Internal server error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain and fallback exception handlers on an app."""
    app.add_exception_handler(LecternError, handle_lectern_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
