"""
Course and lecture repositories for database access.

Encapsulates all Supabase queries and data mapping for the `courses` and
`lectures` tables.
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from .exceptions import CourseNotFoundError, LectureNotFoundError
from .models import ContentState, Course, Lecture

COURSES_TABLE = "courses"
LECTURES_TABLE = "lectures"


class CourseRepository(BaseRepository[Course]):
    """
    Repository for course data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying ownership.
    """

    def get_by_id(self, course_id: int) -> Optional[Course]:
        result = self._db.table(COURSES_TABLE).select("*").eq("id", course_id).execute()
        row = self._first(result.data)
        return self._map_to_course(row) if row else None

    def list_all(self) -> list[Course]:
        result = self._db.table(COURSES_TABLE).select("*").order("id").execute()
        return [self._map_to_course(row) for row in result.data]

    def list_by_state(self, state: ContentState) -> list[Course]:
        result = (
            self._db.table(COURSES_TABLE)
            .select("*")
            .eq("state", state.value)
            .order("id")
            .execute()
        )
        return [self._map_to_course(row) for row in result.data]

    def list_by_teacher(self, teacher_id: int) -> list[Course]:
        result = (
            self._db.table(COURSES_TABLE)
            .select("*")
            .eq("teacher_id", teacher_id)
            .order("id")
            .execute()
        )
        return [self._map_to_course(row) for row in result.data]

    def get_latest_id_by_teacher(self, teacher_id: int) -> Optional[int]:
        """Id of the teacher's most recently created course."""
        result = (
            self._db.table(COURSES_TABLE)
            .select("id")
            .eq("teacher_id", teacher_id)
            .order("id", desc=True)
            .limit(1)
            .execute()
        )
        row = self._first(result.data)
        return int(row["id"]) if row else None

    def create(self, data: dict[str, Any]) -> Course:
        result = self._db.table(COURSES_TABLE).insert(data).execute()
        return self._map_to_course(result.data[0])

    def update(self, course_id: int, data: dict[str, Any]) -> Course:
        result = self._db.table(COURSES_TABLE).update(data).eq("id", course_id).execute()
        row = self._first(result.data)
        if row is None:
            raise CourseNotFoundError(course_id)
        return self._map_to_course(row)

    def delete(self, course_id: int) -> None:
        """Delete a course. Its lectures are removed via CASCADE."""
        self._db.table(COURSES_TABLE).delete().eq("id", course_id).execute()

    def _map_to_course(self, data: dict[str, Any]) -> Course:
        """Map database row to Course model."""
        return Course(
            id=int(data["id"]),
            title=data["title"],
            description=data.get("description"),
            price=float(data.get("price") or 0.0),
            image=data.get("image"),
            teacher_id=int(data["teacher_id"]),
            state=ContentState(data.get("state") or ContentState.PENDING.value),
            reject_reason=data.get("reject_reason"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


class LectureRepository(BaseRepository[Lecture]):
    """Repository for lecture data access."""

    def get_by_id(self, lecture_id: int) -> Optional[Lecture]:
        result = self._db.table(LECTURES_TABLE).select("*").eq("id", lecture_id).execute()
        row = self._first(result.data)
        return self._map_to_lecture(row) if row else None

    def list_by_course(self, course_id: int) -> list[Lecture]:
        result = (
            self._db.table(LECTURES_TABLE)
            .select("*")
            .eq("course_id", course_id)
            .order("id")
            .execute()
        )
        return [self._map_to_lecture(row) for row in result.data]

    def create(self, data: dict[str, Any]) -> Lecture:
        result = self._db.table(LECTURES_TABLE).insert(data).execute()
        return self._map_to_lecture(result.data[0])

    def update(self, lecture_id: int, data: dict[str, Any]) -> Lecture:
        result = self._db.table(LECTURES_TABLE).update(data).eq("id", lecture_id).execute()
        row = self._first(result.data)
        if row is None:
            raise LectureNotFoundError(lecture_id)
        return self._map_to_lecture(row)

    def delete(self, lecture_id: int) -> None:
        self._db.table(LECTURES_TABLE).delete().eq("id", lecture_id).execute()

    def _map_to_lecture(self, data: dict[str, Any]) -> Lecture:
        """Map database row to Lecture model."""
        return Lecture(
            id=int(data["id"]),
            course_id=int(data["course_id"]),
            title=data["title"],
            content=data.get("content"),
            video=data.get("video"),
            state=ContentState(data.get("state") or ContentState.PENDING.value),
            reject_reason=data.get("reject_reason"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
