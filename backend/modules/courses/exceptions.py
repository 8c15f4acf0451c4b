"""
Courses module exceptions.
"""

from shared.exceptions import (
    NotFoundError,
    StorageError,
    ValidationError,
)


class CourseNotFoundError(NotFoundError):
    """Raised when a course is not found."""

    def __init__(self, course_id: object):
        super().__init__(
            f"Course not found: {course_id}",
            code="COURSE_NOT_EXISTED",
            details={"course_id": str(course_id)},
        )


class LectureNotFoundError(NotFoundError):
    """Raised when a lecture is not found."""

    def __init__(self, lecture_id: int):
        super().__init__(
            f"Lecture not found: {lecture_id}",
            code="LECTURE_NOT_EXISTED",
            details={"lecture_id": lecture_id},
        )


class InvalidStateTransitionError(ValidationError):
    """Raised when reviewing content that is no longer PENDING."""

    def __init__(self, kind: str, item_id: int, state: str, target: str):
        super().__init__(
            f"Cannot move {kind} {item_id} from {state} to {target}",
            code="INVALID_STATE_TRANSITION",
            details={"kind": kind, "id": item_id, "state": state, "target": target},
        )


class ContentStorageError(StorageError):
    """Raised when a course image or lecture video cannot be stored or moved."""

    def __init__(self, operation: str, filename: str, reason: str):
        super().__init__(
            f"Failed to {operation} {filename}: {reason}",
            code="CONTENT_STORAGE_FAILED",
            details={"operation": operation, "filename": filename},
        )


class InvalidFilenameError(ValidationError):
    """Raised when a stored file name would escape its directory."""

    def __init__(self, filename: str):
        super().__init__(
            f"Invalid file name: {filename}",
            code="INVALID_FILENAME",
            details={"filename": filename},
        )
