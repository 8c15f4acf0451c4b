"""
Courses module data models.

Courses belong to a teacher; lectures belong to a course. Both go through
the same review workflow.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class ContentState(str, Enum):
    """Review state of a course or lecture."""

    PENDING = "PENDING"      # Submitted, waiting for an admin
    APPROVED = "APPROVED"    # Published
    REJECTED = "REJECTED"    # Turned down, see reject_reason


class Course(BaseModel):
    """A course as stored in the `courses` table."""

    id: int
    title: str
    description: Optional[str] = None
    price: float = 0.0
    image: Optional[str] = None
    teacher_id: int
    state: ContentState = ContentState.PENDING
    reject_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Lecture(BaseModel):
    """A lecture as stored in the `lectures` table."""

    id: int
    course_id: int
    title: str
    content: Optional[str] = None
    video: Optional[str] = None
    state: ContentState = ContentState.PENDING
    reject_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CourseCreateRequest(BaseModel):
    """Request to create a course."""

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=10000)
    price: float = Field(default=0.0, ge=0.0)


class CourseUpdateRequest(BaseModel):
    """Request to update a course's title, description and price."""

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=10000)
    price: float = Field(..., ge=0.0)


class LectureCreateRequest(BaseModel):
    """
    Request to add a lecture to a course.

    `video` names a file already uploaded to the pending video directory.
    """

    title: str = Field(..., min_length=1, max_length=200)
    content: Optional[str] = None
    video: Optional[str] = Field(None, max_length=255)


class LectureUpdateRequest(BaseModel):
    """Request to update a lecture's title and content."""

    title: str = Field(..., min_length=1, max_length=200)
    content: Optional[str] = None


class RejectRequest(BaseModel):
    """Reason given when an admin rejects a course or lecture."""

    reason: str = Field(..., min_length=1, max_length=2000)


class CourseIdResponse(BaseModel):
    """Identifier of a course."""

    id: int
