"""Tests for the Supabase user repository."""

import pytest
from unittest.mock import MagicMock

from postgrest.exceptions import APIError

from modules.users.exceptions import (
    EmailAlreadyExistsError,
    UserNotFoundError,
    UsernameAlreadyExistsError,
)
from modules.users.repository import UserRepository
from shared.models import Role


def create_mock_user_data(user_id: int = 1, username: str = "alice", role: str = "STUDENT") -> dict:
    """Helper to create a users row."""
    return {
        "id": user_id,
        "username": username,
        "email": f"{username}@example.com",
        "full_name": "Alice",
        "password_hash": "$2b$10$hash",
        "role": role,
        "balance": "12.50",
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }


def unique_violation(constraint: str) -> APIError:
    return APIError({
        "code": "23505",
        "message": f'duplicate key value violates unique constraint "{constraint}"',
        "details": None,
        "hint": None,
    })


@pytest.fixture
def mock_db() -> MagicMock:
    return MagicMock()


@pytest.fixture
def repo(mock_db) -> UserRepository:
    return UserRepository(mock_db)


class TestReads:
    def test_get_by_username_maps_row(self, repo, mock_db):
        chain = mock_db.table.return_value.select.return_value.eq.return_value
        chain.execute.return_value.data = [create_mock_user_data(role="TEACHER")]

        user = repo.get_by_username("alice")

        mock_db.table.assert_called_with("users")
        mock_db.table.return_value.select.return_value.eq.assert_called_with("username", "alice")
        assert user.id == 1
        assert user.role == Role.TEACHER
        assert user.balance == 12.5

    def test_get_by_id_missing(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = []
        assert repo.get_by_id(42) is None

    def test_exists_by_email(self, repo, mock_db):
        chain = mock_db.table.return_value.select.return_value.eq.return_value
        chain.execute.return_value.data = [{"id": 1}]
        assert repo.exists_by_email("alice@example.com") is True
        chain.execute.return_value.data = []
        assert repo.exists_by_email("alice@example.com") is False


class TestWrites:
    def test_create(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [create_mock_user_data()]
        user = repo.create({"username": "alice"})
        assert user.username == "alice"
        mock_db.table.return_value.insert.assert_called_once_with({"username": "alice"})

    def test_create_username_conflict(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = unique_violation("users_username_key")
        with pytest.raises(UsernameAlreadyExistsError):
            repo.create({"username": "alice", "email": "alice@example.com"})

    def test_create_email_conflict(self, repo, mock_db):
        mock_db.table.return_value.insert.return_value.execute.side_effect = unique_violation("users_email_key")
        with pytest.raises(EmailAlreadyExistsError):
            repo.create({"username": "alice", "email": "alice@example.com"})

    def test_other_api_errors_propagate(self, repo, mock_db):
        error = APIError({"code": "42501", "message": "permission denied", "details": None, "hint": None})
        mock_db.table.return_value.insert.return_value.execute.side_effect = error
        with pytest.raises(APIError):
            repo.create({"username": "alice"})

    def test_update_missing_row(self, repo, mock_db):
        mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value.data = []
        with pytest.raises(UserNotFoundError):
            repo.update(9, {"full_name": "Nobody"})

    def test_update_email_conflict(self, repo, mock_db):
        chain = mock_db.table.return_value.update.return_value.eq.return_value
        chain.execute.side_effect = unique_violation("users_email_key")
        with pytest.raises(EmailAlreadyExistsError):
            repo.update(1, {"email": "taken@example.com"})
