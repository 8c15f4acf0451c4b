"""
Courses module interfaces.

ICourseRepository and ILectureRepository are the persistence contracts;
ICourseService is what the API layer depends on.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from shared.models import Principal
from .models import (
    ContentState,
    Course,
    CourseCreateRequest,
    CourseUpdateRequest,
    Lecture,
    LectureCreateRequest,
    LectureUpdateRequest,
)


@runtime_checkable
class ICourseRepository(Protocol):
    """Persistence contract for courses."""

    def get_by_id(self, course_id: int) -> Optional[Course]:
        ...

    def list_all(self) -> list[Course]:
        ...

    def list_by_state(self, state: ContentState) -> list[Course]:
        ...

    def list_by_teacher(self, teacher_id: int) -> list[Course]:
        ...

    def get_latest_id_by_teacher(self, teacher_id: int) -> Optional[int]:
        ...

    def create(self, data: dict[str, Any]) -> Course:
        ...

    def update(self, course_id: int, data: dict[str, Any]) -> Course:
        ...

    def delete(self, course_id: int) -> None:
        ...


@runtime_checkable
class ILectureRepository(Protocol):
    """Persistence contract for lectures."""

    def get_by_id(self, lecture_id: int) -> Optional[Lecture]:
        ...

    def list_by_course(self, course_id: int) -> list[Lecture]:
        ...

    def create(self, data: dict[str, Any]) -> Lecture:
        ...

    def update(self, lecture_id: int, data: dict[str, Any]) -> Lecture:
        ...

    def delete(self, lecture_id: int) -> None:
        ...


@runtime_checkable
class ICourseService(Protocol):
    """
    Interface for course and lecture operations.

    Mutations take the acting Principal; ownership is checked after the
    target resource has been loaded.
    """

    async def list_approved_courses(self) -> list[Course]:
        ...

    async def list_all_courses(self, actor: Principal) -> list[Course]:
        """Every course in any state. Admin only."""
        ...

    async def get_course(self, course_id: int) -> Course:
        """
        Raises:
            CourseNotFoundError: If the course doesn't exist
        """
        ...

    async def list_my_courses(self, actor: Principal) -> list[Course]:
        ...

    async def get_my_newest_course_id(self, actor: Principal) -> int:
        ...

    async def create_course(
        self,
        actor: Principal,
        request: CourseCreateRequest,
        image: Optional[bytes] = None,
        image_filename: Optional[str] = None,
    ) -> Course:
        """
        Create a PENDING course owned by the acting teacher.

        Raises:
            AccessDeniedError: If the actor is neither TEACHER nor ADMIN
        """
        ...

    async def update_course(
        self,
        actor: Principal,
        course_id: int,
        request: CourseUpdateRequest,
    ) -> Course:
        """
        Raises:
            CourseNotFoundError: If the course doesn't exist
            AccessDeniedError: If the actor is not the owner or an admin
        """
        ...

    async def delete_course(self, actor: Principal, course_id: int) -> None:
        ...

    async def list_lectures(self, course_id: int) -> list[Lecture]:
        ...

    async def get_lecture(self, lecture_id: int) -> Lecture:
        ...

    async def add_lecture(
        self,
        actor: Principal,
        course_id: int,
        request: LectureCreateRequest,
    ) -> Lecture:
        ...

    async def update_lecture(
        self,
        actor: Principal,
        lecture_id: int,
        request: LectureUpdateRequest,
    ) -> Lecture:
        ...

    async def delete_lecture(self, actor: Principal, lecture_id: int) -> None:
        ...

    async def approve_course(self, actor: Principal, course_id: int) -> Course:
        ...

    async def reject_course(self, actor: Principal, course_id: int, reason: str) -> Course:
        ...

    async def approve_lecture(self, actor: Principal, lecture_id: int) -> Lecture:
        """
        Approve a lecture and publish its video.

        Raises:
            ContentStorageError: If the video cannot be moved; the lecture
                stays PENDING
        """
        ...

    async def reject_lecture(self, actor: Principal, lecture_id: int, reason: str) -> Lecture:
        ...
