"""Tests for token issuance and verification."""

import base64
import json
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from modules.auth.exceptions import (
    BadSignatureError,
    ExpiredTokenError,
    MalformedTokenError,
    TokenConfigurationError,
)
from modules.auth.models import TokenSettings
from modules.auth.tokens import TokenService
from modules.users.models import User
from shared.models import Role

from tests.conftest import TEST_ISSUER, TEST_SIGNER_KEY, create_test_token, make_token_settings


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


def make_user(username: str = "alice", role: Role = Role.STUDENT) -> User:
    return User(id=1, username=username, email=f"{username}@example.com", password_hash="x", role=role)


def _segment(part: str) -> dict:
    padded = part + "=" * (-len(part) % 4)
    return json.loads(base64.urlsafe_b64decode(padded))


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def service(clock) -> TokenService:
    return TokenService(make_token_settings(ttl_seconds=3600), clock=clock)


class TestConstruction:
    def test_empty_signer_key_rejected(self):
        """Should refuse to build without a signer key."""
        with pytest.raises(TokenConfigurationError):
            TokenService(TokenSettings(signer_key="", issuer=TEST_ISSUER))

    def test_defaults(self):
        settings = TokenSettings(signer_key=TEST_SIGNER_KEY, issuer=TEST_ISSUER)
        assert settings.ttl_seconds == 3600
        assert settings.algorithm == "HS512"


class TestIssue:
    def test_wire_format(self, service, clock):
        """Header and payload should carry the documented fields."""
        issued = service.issue(make_user("alice", Role.TEACHER))
        header, payload, signature = issued.token.split(".")

        assert _segment(header) == {"alg": "HS512", "typ": "JWT"}
        claims = _segment(payload)
        assert claims["sub"] == "alice"
        assert claims["iss"] == "localhost:8080"
        assert claims["scope"] == "TEACHER"
        assert claims["iat"] == int(clock.now.timestamp())
        assert claims["exp"] - claims["iat"] == 3600
        assert signature

    def test_validity_window(self, service, clock):
        issued = service.issue(make_user())
        assert issued.issued_at == clock.now
        assert issued.expires_at == clock.now + timedelta(hours=1)

    def test_verifiable_with_pyjwt(self, service):
        """Tokens should be standard JWTs any HS512 verifier accepts."""
        issued = service.issue(make_user())
        decoded = jwt.decode(
            issued.token,
            TEST_SIGNER_KEY,
            algorithms=["HS512"],
            options={"verify_exp": False, "verify_iat": False},
        )
        assert decoded["sub"] == "alice"


class TestVerify:
    def test_fresh_token_valid(self, service):
        token = service.issue(make_user()).token
        result = service.verify(token)
        assert result.signature_valid is True
        assert result.expired is False
        assert result.valid is True
        assert result.claims.sub == "alice"
        assert result.claims.scope == Role.STUDENT

    def test_expiry_boundary(self, service, clock):
        """A token is expired exactly at exp, not a second before."""
        token = service.issue(make_user()).token

        clock.advance(3599)
        assert service.verify(token).valid is True

        clock.advance(1)
        result = service.verify(token)
        assert result.signature_valid is True
        assert result.expired is True
        assert result.valid is False

    def test_wrong_key_reports_bad_signature(self, service):
        token = create_test_token(signer_key="another-signer-key-" + "x" * 64)
        result = service.verify(token)
        assert result.signature_valid is False
        assert result.claims is None
        assert result.valid is False

    def test_tampered_payload_reports_bad_signature(self, service):
        """Changing any payload character must break the signature."""
        header, payload, signature = service.issue(make_user()).token.split(".")
        replacement = "B" if payload[5] != "B" else "C"
        tampered = ".".join([header, payload[:5] + replacement + payload[6:], signature])

        try:
            result = service.verify(tampered)
        except MalformedTokenError:
            # The altered byte may break the JSON instead; still never valid
            return
        assert result.signature_valid is False

    def test_swapped_payload_reports_bad_signature(self, service):
        """A payload re-labelled as ADMIN keeps the old signature and fails."""
        header, _, signature = service.issue(make_user()).token.split(".")
        forged = jwt.encode(
            {"sub": "alice", "iss": TEST_ISSUER, "iat": 1, "exp": 2 ** 31, "scope": "ADMIN"},
            "attacker-key-" + "y" * 64,
            algorithm="HS512",
        ).split(".")[1]
        result = service.verify(".".join([header, forged, signature]))
        assert result.signature_valid is False

    def test_expired_and_bad_signature_both_reported(self, service):
        token = create_test_token(expired=True, signer_key="another-signer-key-" + "x" * 64)
        result = TokenService(make_token_settings()).verify(token)
        assert result.signature_valid is False
        assert result.expired is True

    @pytest.mark.parametrize("token", ["", "not-a-token", "a.b", "a.b.c"])
    def test_malformed_token_raises(self, service, token):
        with pytest.raises(MalformedTokenError):
            service.verify(token)

    def test_missing_scope_is_malformed(self, service):
        token = jwt.encode(
            {"sub": "alice", "iss": TEST_ISSUER, "iat": 1, "exp": 2 ** 31},
            TEST_SIGNER_KEY,
            algorithm="HS512",
        )
        with pytest.raises(MalformedTokenError):
            service.verify(token)

    def test_unknown_scope_is_malformed(self, service):
        token = jwt.encode(
            {"sub": "alice", "iss": TEST_ISSUER, "iat": 1, "exp": 2 ** 31, "scope": "ROOT"},
            TEST_SIGNER_KEY,
            algorithm="HS512",
        )
        with pytest.raises(MalformedTokenError):
            service.verify(token)

    def test_other_algorithm_rejected(self, service):
        token = jwt.encode(
            {"sub": "alice", "iss": TEST_ISSUER, "iat": 1, "exp": 2 ** 31, "scope": "ADMIN"},
            TEST_SIGNER_KEY,
            algorithm="HS256",
        )
        with pytest.raises(MalformedTokenError):
            service.verify(token)


class TestAuthenticate:
    def test_returns_claims(self, service):
        claims = service.authenticate(service.issue(make_user("bob", Role.ADMIN)).token)
        assert claims.sub == "bob"
        principal = claims.to_principal()
        assert principal.is_admin
        assert principal.expires_at - principal.issued_at == timedelta(hours=1)

    def test_expired_raises(self, service, clock):
        token = service.issue(make_user()).token
        clock.advance(3600)
        with pytest.raises(ExpiredTokenError):
            service.authenticate(token)

    def test_bad_signature_raises(self, service):
        with pytest.raises(BadSignatureError):
            service.authenticate(create_test_token(signer_key="another-signer-key-" + "x" * 64))

    def test_role_change_needs_new_token(self, service):
        """The role comes from the token, so an old token keeps the old role."""
        old = service.issue(make_user("alice", Role.STUDENT)).token
        new = service.issue(make_user("alice", Role.TEACHER)).token
        assert service.authenticate(old).scope == Role.STUDENT
        assert service.authenticate(new).scope == Role.TEACHER
