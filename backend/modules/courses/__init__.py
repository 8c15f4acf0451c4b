"""
Courses module.

Courses, lectures and their PENDING / APPROVED / REJECTED review workflow.

Public API:
- ICourseService: Interface for course and lecture operations
- Course, Lecture, ContentState: Core models
- Course exceptions: CourseNotFoundError, LectureNotFoundError, etc.
"""

from .interfaces import ICourseService, ICourseRepository, ILectureRepository
from .models import ContentState, Course, Lecture
from .exceptions import (
    CourseNotFoundError,
    LectureNotFoundError,
    InvalidStateTransitionError,
    ContentStorageError,
)

__all__ = [
    "ICourseService",
    "ICourseRepository",
    "ILectureRepository",
    "ContentState",
    "Course",
    "Lecture",
    "CourseNotFoundError",
    "LectureNotFoundError",
    "InvalidStateTransitionError",
    "ContentStorageError",
]
