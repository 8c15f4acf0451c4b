"""
Course and lecture service.

Teachers create courses and lectures; both start PENDING and are reviewed
by admins. Mutations go through the AccessPolicyEngine after the target
has been loaded, so callers see "not found" for missing content and
"forbidden" only for content that exists but belongs to someone else.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from shared.models import Principal, Role
from modules.auth.policies import AccessPolicyEngine

from .interfaces import ICourseRepository, ICourseService, ILectureRepository
from .models import (
    ContentState,
    Course,
    CourseCreateRequest,
    CourseUpdateRequest,
    Lecture,
    LectureCreateRequest,
    LectureUpdateRequest,
)
from .exceptions import (
    CourseNotFoundError,
    InvalidStateTransitionError,
    LectureNotFoundError,
)
from .storage import ContentStorage

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class CourseService(ICourseService):
    """Course service backed by course and lecture repositories."""

    def __init__(
        self,
        courses: ICourseRepository,
        lectures: ILectureRepository,
        policies: AccessPolicyEngine,
        storage: ContentStorage,
    ):
        self._courses = courses
        self._lectures = lectures
        self._policies = policies
        self._storage = storage

    # -------------------------------------------------------------------------
    # Courses
    # -------------------------------------------------------------------------

    async def list_approved_courses(self) -> list[Course]:
        return self._courses.list_by_state(ContentState.APPROVED)

    async def list_all_courses(self, actor: Principal) -> list[Course]:
        self._policies.authorize_admin(actor)
        return self._courses.list_all()

    async def get_course(self, course_id: int) -> Course:
        course = self._courses.get_by_id(course_id)
        if course is None:
            raise CourseNotFoundError(course_id)
        return course

    async def list_my_courses(self, actor: Principal) -> list[Course]:
        me = self._policies.resolve_actor(actor)
        return self._courses.list_by_teacher(me.id)

    async def get_my_newest_course_id(self, actor: Principal) -> int:
        me = self._policies.resolve_actor(actor)
        course_id = self._courses.get_latest_id_by_teacher(me.id)
        if course_id is None:
            raise CourseNotFoundError(f"teacher:{me.id}")
        return course_id

    async def create_course(
        self,
        actor: Principal,
        request: CourseCreateRequest,
        image: Optional[bytes] = None,
        image_filename: Optional[str] = None,
    ) -> Course:
        self._policies.authorize_role(actor, Role.TEACHER, Role.ADMIN)
        me = self._policies.resolve_actor(actor)

        image_name = None
        if image:
            image_name = self._storage.save_course_image(image, image_filename)

        course = self._courses.create({
            "title": request.title,
            "description": request.description,
            "price": request.price,
            "image": image_name,
            "teacher_id": me.id,
            "state": ContentState.PENDING.value,
        })
        logger.info("Course %s created by %s", course.id, actor.username)
        return course

    async def update_course(
        self,
        actor: Principal,
        course_id: int,
        request: CourseUpdateRequest,
    ) -> Course:
        course = await self.get_course(course_id)
        self._policies.authorize_admin_or_owner(actor, course.teacher_id)
        return self._courses.update(course.id, {
            "title": request.title,
            "description": request.description,
            "price": request.price,
            "updated_at": _now(),
        })

    async def delete_course(self, actor: Principal, course_id: int) -> None:
        course = await self.get_course(course_id)
        self._policies.authorize_admin_or_owner(actor, course.teacher_id)
        self._courses.delete(course.id)
        logger.info("Course %s deleted by %s", course.id, actor.username)

    # -------------------------------------------------------------------------
    # Lectures
    # -------------------------------------------------------------------------

    async def list_lectures(self, course_id: int) -> list[Lecture]:
        return self._lectures.list_by_course(course_id)

    async def get_lecture(self, lecture_id: int) -> Lecture:
        lecture = self._lectures.get_by_id(lecture_id)
        if lecture is None:
            raise LectureNotFoundError(lecture_id)
        return lecture

    async def add_lecture(
        self,
        actor: Principal,
        course_id: int,
        request: LectureCreateRequest,
    ) -> Lecture:
        course = await self.get_course(course_id)
        self._policies.authorize_admin_or_owner(actor, course.teacher_id)
        lecture = self._lectures.create({
            "course_id": course.id,
            "title": request.title,
            "content": request.content,
            "video": request.video,
            "state": ContentState.PENDING.value,
        })
        logger.info("Lecture %s added to course %s by %s", lecture.id, course.id, actor.username)
        return lecture

    async def update_lecture(
        self,
        actor: Principal,
        lecture_id: int,
        request: LectureUpdateRequest,
    ) -> Lecture:
        lecture = await self.get_lecture(lecture_id)
        await self._authorize_lecture_owner(actor, lecture)
        return self._lectures.update(lecture.id, {
            "title": request.title,
            "content": request.content,
            "updated_at": _now(),
        })

    async def delete_lecture(self, actor: Principal, lecture_id: int) -> None:
        lecture = await self.get_lecture(lecture_id)
        await self._authorize_lecture_owner(actor, lecture)
        self._lectures.delete(lecture.id)
        logger.info("Lecture %s deleted by %s", lecture.id, actor.username)

    # -------------------------------------------------------------------------
    # Review workflow (admin only)
    # -------------------------------------------------------------------------

    async def approve_course(self, actor: Principal, course_id: int) -> Course:
        self._policies.authorize_admin(actor)
        course = await self.get_course(course_id)
        self._require_pending("course", course.id, course.state, ContentState.APPROVED)
        updated = self._courses.update(course.id, self._review(ContentState.APPROVED))
        logger.info("Course %s approved by %s", course.id, actor.username)
        return updated

    async def reject_course(self, actor: Principal, course_id: int, reason: str) -> Course:
        self._policies.authorize_admin(actor)
        course = await self.get_course(course_id)
        self._require_pending("course", course.id, course.state, ContentState.REJECTED)
        updated = self._courses.update(course.id, self._review(ContentState.REJECTED, reason))
        logger.info("Course %s rejected by %s", course.id, actor.username)
        return updated

    async def approve_lecture(self, actor: Principal, lecture_id: int) -> Lecture:
        """
        Approve a lecture, publishing its video first.

        The state is only saved once the video is in the public directory.
        A failed move raises ContentStorageError and leaves the lecture
        PENDING. If saving the new state fails, the video is moved back to
        the pending directory so the approval can be retried.
        """
        self._policies.authorize_admin(actor)
        lecture = await self.get_lecture(lecture_id)
        self._require_pending("lecture", lecture.id, lecture.state, ContentState.APPROVED)

        if lecture.video:
            self._storage.publish_lecture_video(lecture.video)

        try:
            updated = self._lectures.update(lecture.id, self._review(ContentState.APPROVED))
        except Exception:
            if lecture.video:
                logger.warning("Saving approval of lecture %s failed, unpublishing video", lecture.id)
                self._storage.unpublish_lecture_video(lecture.video)
            raise
        logger.info("Lecture %s approved by %s", lecture.id, actor.username)
        return updated

    async def reject_lecture(self, actor: Principal, lecture_id: int, reason: str) -> Lecture:
        self._policies.authorize_admin(actor)
        lecture = await self.get_lecture(lecture_id)
        self._require_pending("lecture", lecture.id, lecture.state, ContentState.REJECTED)
        updated = self._lectures.update(lecture.id, self._review(ContentState.REJECTED, reason))
        logger.info("Lecture %s rejected by %s", lecture.id, actor.username)
        return updated

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    async def _authorize_lecture_owner(self, actor: Principal, lecture: Lecture) -> None:
        course = await self.get_course(lecture.course_id)
        self._policies.authorize_admin_or_owner(actor, course.teacher_id)

    @staticmethod
    def _require_pending(kind: str, item_id: int, state: ContentState, target: ContentState) -> None:
        if state != ContentState.PENDING:
            raise InvalidStateTransitionError(kind, item_id, state.value, target.value)

    @staticmethod
    def _review(state: ContentState, reason: Optional[str] = None) -> dict[str, Any]:
        data: dict[str, Any] = {"state": state.value, "updated_at": _now()}
        if reason is not None:
            data["reject_reason"] = reason
        return data
