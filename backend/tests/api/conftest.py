"""
API test fixtures.

Builds a fresh app whose services run over in-memory repositories, a real
token service with the test signer key and a low-cost password hasher.
"""

from dataclasses import dataclass

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import (
    get_auth_service,
    get_course_service,
    get_password_reset_service,
    get_user_service,
)
from modules.auth.password_reset import PasswordResetService
from modules.auth.passwords import PasswordHasher
from modules.auth.policies import AccessPolicyEngine
from modules.auth.service import AuthService
from modules.auth.tokens import TokenService
from modules.courses.service import CourseService
from modules.courses.storage import ContentStorage
from modules.users.service import UserService

from tests.conftest import make_token_settings
from tests.fakes import (
    FakeCourseRepository,
    FakeLectureRepository,
    FakeResetCodeRepository,
    FakeUserRepository,
    RecordingCodeSender,
)


@dataclass
class Stack:
    """Everything a route test may want to seed or inspect."""

    client: TestClient
    users: FakeUserRepository
    courses: FakeCourseRepository
    lectures: FakeLectureRepository
    codes: FakeResetCodeRepository
    sender: RecordingCodeSender
    hasher: PasswordHasher
    tokens: TokenService
    storage: ContentStorage


@pytest.fixture
def stack(tmp_path) -> Stack:
    users = FakeUserRepository()
    courses = FakeCourseRepository()
    lectures = FakeLectureRepository()
    codes = FakeResetCodeRepository()
    sender = RecordingCodeSender()
    hasher = PasswordHasher(rounds=4)
    tokens = TokenService(make_token_settings())
    storage = ContentStorage(
        image_dir=tmp_path / "images",
        pending_video_dir=tmp_path / "pending",
        public_video_dir=tmp_path / "public",
    )
    policies = AccessPolicyEngine(users)

    auth = AuthService(users=users, hasher=hasher, tokens=tokens)
    reset = PasswordResetService(users=users, codes=codes, hasher=hasher, sender=sender)
    user_service = UserService(repository=users, hasher=hasher, policies=policies)
    course_service = CourseService(
        courses=courses, lectures=lectures, policies=policies, storage=storage
    )

    app = create_app()
    app.dependency_overrides[get_auth_service] = lambda: auth
    app.dependency_overrides[get_password_reset_service] = lambda: reset
    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_course_service] = lambda: course_service

    client = TestClient(app, raise_server_exceptions=False)
    yield Stack(client, users, courses, lectures, codes, sender, hasher, tokens, storage)
    app.dependency_overrides.clear()
