"""Tests for auth models."""

from datetime import timezone

import pytest
from pydantic import ValidationError

from modules.auth.models import ResetPasswordRequest, TokenClaims, TokenVerification
from shared.models import Role


class TestTokenClaims:
    def test_to_principal(self):
        claims = TokenClaims(sub="alice", iss="localhost:8080", iat=1700000000, exp=1700003600, scope="TEACHER")
        principal = claims.to_principal()
        assert principal.username == "alice"
        assert principal.role == Role.TEACHER
        assert principal.issued_at.tzinfo == timezone.utc
        assert (principal.expires_at - principal.issued_at).total_seconds() == 3600

    def test_frozen(self):
        claims = TokenClaims(sub="alice", iss="x", iat=1, exp=2, scope=Role.STUDENT)
        with pytest.raises(ValidationError):
            claims.sub = "bob"


class TestTokenVerification:
    @pytest.mark.parametrize(
        "signature_valid, expired, valid",
        [(True, False, True), (True, True, False), (False, False, False), (False, True, False)],
    )
    def test_valid_combines_both_checks(self, signature_valid, expired, valid):
        assert TokenVerification(signature_valid=signature_valid, expired=expired).valid is valid


class TestResetPasswordRequest:
    def test_accepts_camel_case_alias(self):
        request = ResetPasswordRequest.model_validate(
            {"email": "alice@example.com", "code": "123456", "newPassword": "secret"}
        )
        assert request.new_password == "secret"

    def test_rejects_invalid_email(self):
        with pytest.raises(ValidationError):
            ResetPasswordRequest(email="not-an-email", code="1", new_password="secret")
