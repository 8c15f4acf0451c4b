"""
User API endpoints.

Registration is public; everything else requires a token, and access to
a specific account is limited to admins and the account itself.
"""

from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_user_service
from shared.models import Principal

from .interfaces import IUserService
from .models import (
    AssignRoleRequest,
    MessageResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=201)
async def register(
    request: UserCreateRequest,
    service: IUserService = Depends(get_user_service),
) -> UserResponse:
    """
    Register a new account. New accounts are students.
    """
    user = await service.register(request)
    return UserResponse.from_user(user)


@router.get("/me", response_model=UserResponse)
async def get_my_info(
    user: Principal = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> UserResponse:
    """
    Get the current user's account.
    """
    return UserResponse.from_user(await service.get_me(user))


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    user: Principal = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> UserResponse:
    return UserResponse.from_user(await service.get_user(user, user_id))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    request: UserUpdateRequest,
    user: Principal = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> UserResponse:
    """
    Replace an account's email, name and password.
    """
    return UserResponse.from_user(await service.update_user(user, user_id, request))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    user: Principal = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> MessageResponse:
    await service.delete_user(user, user_id)
    return MessageResponse(message="User has been deleted")


@router.post("/{user_id}/assign-role", response_model=MessageResponse)
async def assign_role(
    user_id: int,
    request: AssignRoleRequest,
    user: Principal = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> MessageResponse:
    """
    Change an account's role to TEACHER or STUDENT.
    """
    return MessageResponse(message=await service.assign_role(user, user_id, request.role))
