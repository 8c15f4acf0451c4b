"""
Authentication API endpoints.

Login, token introspection and the two-step password reset.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service, get_password_reset_service
from modules.users.models import MessageResponse

from .interfaces import IAuthService
from .models import (
    AuthenticationRequest,
    AuthenticationResponse,
    ForgotPasswordRequest,
    IntrospectRequest,
    IntrospectResponse,
    ResetPasswordRequest,
)
from .password_reset import PasswordResetService

router = APIRouter()


@router.post("/token", response_model=AuthenticationResponse)
async def authenticate(
    request: AuthenticationRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthenticationResponse:
    """
    Exchange a username and password for a signed token.
    """
    return await service.authenticate(request.username, request.password)


@router.post("/introspect", response_model=IntrospectResponse)
async def introspect(
    request: IntrospectRequest,
    service: IAuthService = Depends(get_auth_service),
) -> IntrospectResponse:
    """
    Check whether a token is currently valid (signature intact, not expired).
    """
    return await service.introspect(request.token)


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    service: PasswordResetService = Depends(get_password_reset_service),
) -> MessageResponse:
    """
    Send a verification code to the account's email address.
    """
    await service.request_reset(request.email)
    return MessageResponse(message="Verification code has been sent to your email")


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    service: PasswordResetService = Depends(get_password_reset_service),
) -> MessageResponse:
    """
    Redeem a verification code and set a new password.
    """
    await service.reset_password(request.email, request.code, request.new_password)
    return MessageResponse(message="Password has been reset successfully")
