"""
Password reset code repository.

One live code per email: saving a code replaces any previous one
(upsert on the `email` primary key of `password_reset_codes`).
"""

from datetime import datetime
from typing import Any, Optional

from shared.repository import BaseRepository
from .models import PasswordResetCode

RESET_CODES_TABLE = "password_reset_codes"


class ResetCodeRepository(BaseRepository[PasswordResetCode]):
    """Repository for password reset verification codes."""

    def save(self, email: str, code: str, expires_at: datetime) -> PasswordResetCode:
        data = {
            "email": email,
            "code": code,
            "expires_at": expires_at.isoformat(),
        }
        result = self._db.table(RESET_CODES_TABLE).upsert(data, on_conflict="email").execute()
        return self._map_to_code(result.data[0])

    def get(self, email: str) -> Optional[PasswordResetCode]:
        result = self._db.table(RESET_CODES_TABLE).select("*").eq("email", email).execute()
        row = self._first(result.data)
        return self._map_to_code(row) if row else None

    def delete(self, email: str) -> None:
        self._db.table(RESET_CODES_TABLE).delete().eq("email", email).execute()

    def consume(self, email: str, code: str) -> Optional[PasswordResetCode]:
        result = (
            self._db.table(RESET_CODES_TABLE)
            .delete()
            .eq("email", email)
            .eq("code", code)
            .execute()
        )
        row = self._first(result.data)
        return self._map_to_code(row) if row else None

    def _map_to_code(self, data: dict[str, Any]) -> PasswordResetCode:
        """Map database row to PasswordResetCode model."""
        return PasswordResetCode(
            email=data["email"],
            code=data["code"],
            expires_at=data["expires_at"],
            created_at=data.get("created_at"),
        )
