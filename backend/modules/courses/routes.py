"""
Course and lecture API endpoints.

Browsing approved content is public. Creating content needs a TEACHER or
ADMIN token; changing it needs the owning teacher or an admin.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from api.middleware.auth import get_current_user
from api.dependencies import get_course_service
from modules.users.models import MessageResponse
from shared.models import Principal

from .interfaces import ICourseService
from .models import (
    Course,
    CourseCreateRequest,
    CourseIdResponse,
    CourseUpdateRequest,
    Lecture,
    LectureCreateRequest,
    LectureUpdateRequest,
)

router = APIRouter()
lectures_router = APIRouter()


# -----------------------------------------------------------------------------
# Courses
# -----------------------------------------------------------------------------


@router.get("", response_model=list[Course])
async def list_courses(
    service: ICourseService = Depends(get_course_service),
) -> list[Course]:
    """
    List approved courses.
    """
    return await service.list_approved_courses()


@router.get("/mine", response_model=list[Course])
async def list_my_courses(
    user: Principal = Depends(get_current_user),
    service: ICourseService = Depends(get_course_service),
) -> list[Course]:
    """
    List every course owned by the current user, in any state.
    """
    return await service.list_my_courses(user)


@router.get("/mine/newest", response_model=CourseIdResponse)
async def get_my_newest_course(
    user: Principal = Depends(get_current_user),
    service: ICourseService = Depends(get_course_service),
) -> CourseIdResponse:
    return CourseIdResponse(id=await service.get_my_newest_course_id(user))


@router.post("", response_model=Course, status_code=201)
async def create_course(
    title: str = Form(..., min_length=1, max_length=200),
    description: Optional[str] = Form(None, max_length=10000),
    price: float = Form(0.0, ge=0.0),
    image: Optional[UploadFile] = File(None),
    user: Principal = Depends(get_current_user),
    service: ICourseService = Depends(get_course_service),
) -> Course:
    """
    Create a course from a multipart form with an optional cover image.

    It stays PENDING until an admin reviews it.
    """
    request = CourseCreateRequest(title=title, description=description, price=price)
    if image is None:
        return await service.create_course(user, request)
    return await service.create_course(user, request, await image.read(), image.filename)


@router.get("/{course_id}", response_model=Course)
async def get_course(
    course_id: int,
    service: ICourseService = Depends(get_course_service),
) -> Course:
    return await service.get_course(course_id)


@router.put("/{course_id}", response_model=Course)
async def update_course(
    course_id: int,
    request: CourseUpdateRequest,
    user: Principal = Depends(get_current_user),
    service: ICourseService = Depends(get_course_service),
) -> Course:
    return await service.update_course(user, course_id, request)


@router.delete("/{course_id}", status_code=204)
async def delete_course(
    course_id: int,
    user: Principal = Depends(get_current_user),
    service: ICourseService = Depends(get_course_service),
) -> None:
    await service.delete_course(user, course_id)


@router.get("/{course_id}/lectures", response_model=list[Lecture])
async def list_lectures(
    course_id: int,
    service: ICourseService = Depends(get_course_service),
) -> list[Lecture]:
    return await service.list_lectures(course_id)


@router.post("/{course_id}/lectures", response_model=Lecture, status_code=201)
async def add_lecture(
    course_id: int,
    request: LectureCreateRequest,
    user: Principal = Depends(get_current_user),
    service: ICourseService = Depends(get_course_service),
) -> Lecture:
    """
    Add a PENDING lecture to a course owned by the current user.
    """
    return await service.add_lecture(user, course_id, request)


# -----------------------------------------------------------------------------
# Lectures
# -----------------------------------------------------------------------------


@lectures_router.get("/{lecture_id}", response_model=Lecture)
async def get_lecture(
    lecture_id: int,
    service: ICourseService = Depends(get_course_service),
) -> Lecture:
    return await service.get_lecture(lecture_id)


@lectures_router.put("/{lecture_id}", response_model=Lecture)
async def update_lecture(
    lecture_id: int,
    request: LectureUpdateRequest,
    user: Principal = Depends(get_current_user),
    service: ICourseService = Depends(get_course_service),
) -> Lecture:
    return await service.update_lecture(user, lecture_id, request)


@lectures_router.delete("/{lecture_id}", response_model=MessageResponse)
async def delete_lecture(
    lecture_id: int,
    user: Principal = Depends(get_current_user),
    service: ICourseService = Depends(get_course_service),
) -> MessageResponse:
    await service.delete_lecture(user, lecture_id)
    return MessageResponse(message="Lecture has been deleted")
