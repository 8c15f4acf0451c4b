"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from typing import Any, Optional, TypeVar, Generic

from postgrest.exceptions import APIError
from supabase import Client


T = TypeVar("T")

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class CourseRepository(BaseRepository[Course]):
            def get_by_id(self, course_id: int) -> Optional[Course]:
                result = self._db.table("courses").select("*").eq("id", course_id).execute()
                row = self._first(result.data)
                return self._map_to_course(row) if row else None
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _first(rows: Optional[list[dict[str, Any]]]) -> Optional[dict[str, Any]]:
        """Return the first row of a result set, or None when it is empty."""
        if not rows:
            return None
        return rows[0]

    @staticmethod
    def _is_unique_violation(error: APIError, constraint: Optional[str] = None) -> bool:
        """
        Check whether a PostgREST error is a unique constraint violation.

        Args:
            error: Error raised by the Supabase client.
            constraint: Optional constraint name that must appear in the error.
        """
        if error.code != UNIQUE_VIOLATION:
            return False
        if constraint is None:
            return True
        text = " ".join(str(part) for part in (error.message, error.details) if part)
        return constraint in text
