"""
Admin endpoints.

Account and content listings plus the course/lecture review workflow.
Every operation is admin-only; the services enforce it.
"""

from fastapi import APIRouter, Depends

from modules.courses.interfaces import ICourseService
from modules.courses.models import Course, Lecture, RejectRequest
from modules.users.interfaces import IUserService
from modules.users.models import UserResponse
from shared.models import Principal

from ..dependencies import get_course_service, get_user_service
from ..middleware.auth import get_current_user

router = APIRouter()


@router.get("/users", response_model=list[UserResponse])
async def list_users(
    user: Principal = Depends(get_current_user),
    service: IUserService = Depends(get_user_service),
) -> list[UserResponse]:
    return [UserResponse.from_user(u) for u in await service.list_users(user)]


@router.get("/courses", response_model=list[Course])
async def list_all_courses(
    user: Principal = Depends(get_current_user),
    service: ICourseService = Depends(get_course_service),
) -> list[Course]:
    """
    List every course regardless of review state.
    """
    return await service.list_all_courses(user)


@router.post("/courses/{course_id}/approve", response_model=Course)
async def approve_course(
    course_id: int,
    user: Principal = Depends(get_current_user),
    service: ICourseService = Depends(get_course_service),
) -> Course:
    return await service.approve_course(user, course_id)


@router.post("/courses/{course_id}/reject", response_model=Course)
async def reject_course(
    course_id: int,
    request: RejectRequest,
    user: Principal = Depends(get_current_user),
    service: ICourseService = Depends(get_course_service),
) -> Course:
    return await service.reject_course(user, course_id, request.reason)


@router.post("/lectures/{lecture_id}/approve", response_model=Lecture)
async def approve_lecture(
    lecture_id: int,
    user: Principal = Depends(get_current_user),
    service: ICourseService = Depends(get_course_service),
) -> Lecture:
    """
    Approve a lecture and move its video to the public directory.
    """
    return await service.approve_lecture(user, lecture_id)


@router.post("/lectures/{lecture_id}/reject", response_model=Lecture)
async def reject_lecture(
    lecture_id: int,
    request: RejectRequest,
    user: Principal = Depends(get_current_user),
    service: ICourseService = Depends(get_course_service),
) -> Lecture:
    return await service.reject_lecture(user, lecture_id, request.reason)
