"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
import jwt  # PyJWT

from api.dependencies import reset_container
from modules.auth.models import TokenSettings
from shared.config import get_settings
from shared.models import Principal, Role


# Test signer key (only for testing). HS512 wants at least 64 bytes.
TEST_SIGNER_KEY = "lectern-test-signer-key-" + "0123456789abcdef" * 4
TEST_ISSUER = "localhost:8080"


def make_token_settings(ttl_seconds: int = 3600, signer_key: str = TEST_SIGNER_KEY) -> TokenSettings:
    return TokenSettings(signer_key=signer_key, issuer=TEST_ISSUER, ttl_seconds=ttl_seconds)


def create_test_token(
    username: str = "alice",
    role: Role = Role.STUDENT,
    expired: bool = False,
    signer_key: str = TEST_SIGNER_KEY,
) -> str:
    """
    Create a signed test token.

    Args:
        username: Subject of the token
        role: Role placed in the scope claim
        expired: If True, the token expired an hour ago
        signer_key: Key used to sign the token

    Returns:
        Compact HS512 JWT
    """
    now = datetime.now(timezone.utc)
    issued = now - timedelta(hours=2) if expired else now
    payload = {
        "sub": username,
        "iss": TEST_ISSUER,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(hours=1)).timestamp()),
        "scope": role.value,
    }
    return jwt.encode(payload, signer_key, algorithm="HS512")


def auth_header(username: str = "alice", role: Role = Role.STUDENT) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_test_token(username, role)}"}


def make_principal(username: str = "alice", role: Role = Role.STUDENT) -> Principal:
    return Principal(username=username, role=role)


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container and cached settings around each test."""
    reset_container()
    get_settings.cache_clear()
    yield
    reset_container()
    get_settings.cache_clear()


@pytest.fixture
def admin() -> Principal:
    return make_principal("root", Role.ADMIN)


@pytest.fixture
def teacher() -> Principal:
    return make_principal("tina", Role.TEACHER)


@pytest.fixture
def student() -> Principal:
    return make_principal("alice", Role.STUDENT)
