"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Process-wide configuration (the token signing key in particular) is read
once here and handed to the services as immutable values.
"""

from datetime import timedelta
from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService, IResetCodeRepository
    from modules.auth.notifier import ICodeSender
    from modules.auth.password_reset import PasswordResetService
    from modules.auth.passwords import PasswordHasher
    from modules.auth.policies import AccessPolicyEngine
    from modules.auth.tokens import TokenService
    from modules.courses.interfaces import ICourseRepository, ICourseService, ILectureRepository
    from modules.courses.storage import ContentStorage
    from modules.users.interfaces import IUserRepository, IUserService


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._user_repository: "IUserRepository | None" = None
        self._course_repository: "ICourseRepository | None" = None
        self._lecture_repository: "ILectureRepository | None" = None
        self._reset_code_repository: "IResetCodeRepository | None" = None
        self._hasher: "PasswordHasher | None" = None
        self._tokens: "TokenService | None" = None
        self._policies: "AccessPolicyEngine | None" = None
        self._storage: "ContentStorage | None" = None
        self._code_sender: "ICodeSender | None" = None
        self._auth_service: "IAuthService | None" = None
        self._password_reset_service: "PasswordResetService | None" = None
        self._user_service: "IUserService | None" = None
        self._course_service: "ICourseService | None" = None

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    @property
    def user_repository(self) -> "IUserRepository":
        if self._user_repository is None:
            from modules.users.repository import UserRepository
            from shared.database import get_supabase_client
            self._user_repository = UserRepository(get_supabase_client())
        return self._user_repository

    @property
    def course_repository(self) -> "ICourseRepository":
        if self._course_repository is None:
            from modules.courses.repository import CourseRepository
            from shared.database import get_supabase_client
            self._course_repository = CourseRepository(get_supabase_client())
        return self._course_repository

    @property
    def lecture_repository(self) -> "ILectureRepository":
        if self._lecture_repository is None:
            from modules.courses.repository import LectureRepository
            from shared.database import get_supabase_client
            self._lecture_repository = LectureRepository(get_supabase_client())
        return self._lecture_repository

    @property
    def reset_code_repository(self) -> "IResetCodeRepository":
        if self._reset_code_repository is None:
            from modules.auth.repository import ResetCodeRepository
            from shared.database import get_supabase_client
            self._reset_code_repository = ResetCodeRepository(get_supabase_client())
        return self._reset_code_repository

    # -------------------------------------------------------------------------
    # Core components
    # -------------------------------------------------------------------------

    @property
    def hasher(self) -> "PasswordHasher":
        if self._hasher is None:
            from modules.auth.passwords import PasswordHasher
            from shared.config import get_settings
            settings = get_settings()
            self._hasher = PasswordHasher(
                rounds=settings.bcrypt_rounds,
                timeout_seconds=settings.password_hash_timeout_seconds,
            )
        return self._hasher

    @property
    def tokens(self) -> "TokenService":
        if self._tokens is None:
            from modules.auth.models import TokenSettings
            from modules.auth.tokens import TokenService
            from shared.config import get_settings
            settings = get_settings()
            self._tokens = TokenService(TokenSettings(
                signer_key=settings.jwt_signer_key,
                issuer=settings.jwt_issuer,
                ttl_seconds=settings.jwt_ttl_seconds,
            ))
        return self._tokens

    @property
    def policies(self) -> "AccessPolicyEngine":
        if self._policies is None:
            from modules.auth.policies import AccessPolicyEngine
            self._policies = AccessPolicyEngine(self.user_repository)
        return self._policies

    @property
    def storage(self) -> "ContentStorage":
        if self._storage is None:
            from modules.courses.storage import ContentStorage
            from shared.config import get_settings
            settings = get_settings()
            self._storage = ContentStorage(
                image_dir=settings.course_image_dir,
                pending_video_dir=settings.lecture_pending_dir,
                public_video_dir=settings.lecture_public_dir,
            )
        return self._storage

    @property
    def code_sender(self) -> "ICodeSender":
        if self._code_sender is None:
            from modules.auth.notifier import LoggingCodeSender
            self._code_sender = LoggingCodeSender()
        return self._code_sender

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                users=self.user_repository,
                hasher=self.hasher,
                tokens=self.tokens,
            )
        return self._auth_service

    @property
    def password_reset(self) -> "PasswordResetService":
        """Get the password reset service instance."""
        if self._password_reset_service is None:
            from modules.auth.password_reset import PasswordResetService
            from shared.config import get_settings
            settings = get_settings()
            self._password_reset_service = PasswordResetService(
                users=self.user_repository,
                codes=self.reset_code_repository,
                hasher=self.hasher,
                sender=self.code_sender,
                code_ttl=timedelta(minutes=settings.password_reset_code_ttl_minutes),
            )
        return self._password_reset_service

    @property
    def users(self) -> "IUserService":
        """Get the user service instance."""
        if self._user_service is None:
            from modules.users.service import UserService
            self._user_service = UserService(
                repository=self.user_repository,
                hasher=self.hasher,
                policies=self.policies,
            )
        return self._user_service

    @property
    def courses(self) -> "ICourseService":
        """Get the course service instance."""
        if self._course_service is None:
            from modules.courses.service import CourseService
            self._course_service = CourseService(
                courses=self.course_repository,
                lectures=self.lecture_repository,
                policies=self.policies,
                storage=self.storage,
            )
        return self._course_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._user_repository = None
        self._course_repository = None
        self._lecture_repository = None
        self._reset_code_repository = None
        self._hasher = None
        self._tokens = None
        self._policies = None
        self._storage = None
        self._code_sender = None
        self._auth_service = None
        self._password_reset_service = None
        self._user_service = None
        self._course_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_password_reset_service() -> "PasswordResetService":
    """FastAPI dependency for password reset service."""
    return get_container().password_reset


def get_user_service() -> "IUserService":
    """FastAPI dependency for user service."""
    return get_container().users


def get_course_service() -> "ICourseService":
    """FastAPI dependency for course service."""
    return get_container().courses
