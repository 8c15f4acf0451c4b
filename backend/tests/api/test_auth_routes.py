"""
Tests for the authentication endpoints and bearer token handling.
"""

from shared.models import Role

from tests.conftest import auth_header, create_test_token


def seed_alice(stack, password: str = "secret"):
    return stack.users.add("alice", Role.STUDENT, password_hash=stack.hasher.hash(password))


class TestLogin:
    def test_login_and_use_token(self, stack):
        """Register-free login: a seeded user gets a token that unlocks /users/me."""
        seed_alice(stack)

        response = stack.client.post("/api/auth/token", json={"username": "alice", "password": "secret"})
        assert response.status_code == 200
        body = response.json()
        assert body["authenticated"] is True
        assert body["expires_at"]

        me = stack.client.get("/api/users/me", headers={"Authorization": f"Bearer {body['token']}"})
        assert me.status_code == 200
        assert me.json()["username"] == "alice"
        assert "password_hash" not in me.json()

    def test_wrong_password(self, stack):
        seed_alice(stack)
        response = stack.client.post("/api/auth/token", json={"username": "alice", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHENTICATED"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_unknown_user(self, stack):
        response = stack.client.post("/api/auth/token", json={"username": "ghost", "password": "x"})
        assert response.status_code == 404
        assert response.json()["error"] == "USER_NOT_EXISTED"

    def test_missing_fields(self, stack):
        assert stack.client.post("/api/auth/token", json={"username": "alice"}).status_code == 422


class TestIntrospect:
    def test_valid_token(self, stack):
        response = stack.client.post("/api/auth/introspect", json={"token": create_test_token()})
        assert response.json() == {"valid": True}

    def test_expired_token(self, stack):
        response = stack.client.post("/api/auth/introspect", json={"token": create_test_token(expired=True)})
        assert response.status_code == 200
        assert response.json() == {"valid": False}

    def test_malformed_token(self, stack):
        response = stack.client.post("/api/auth/introspect", json={"token": "garbage"})
        assert response.status_code == 401
        assert response.json()["error"] == "MALFORMED_TOKEN"


class TestBearerAuthentication:
    def test_missing_header(self, stack):
        response = stack.client.get("/api/users/me")
        assert response.status_code == 401
        assert response.json()["error"] == "MISSING_TOKEN"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_expired_token(self, stack):
        seed_alice(stack)
        headers = {"Authorization": f"Bearer {create_test_token(expired=True)}"}
        response = stack.client.get("/api/users/me", headers=headers)
        assert response.status_code == 401
        assert response.json()["error"] == "TOKEN_EXPIRED"

    def test_foreign_signature(self, stack):
        seed_alice(stack)
        token = create_test_token(signer_key="other-signer-key-" + "q" * 64)
        response = stack.client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["error"] == "BAD_SIGNATURE"

    def test_valid_token_for_deleted_account(self, stack):
        response = stack.client.get("/api/users/me", headers=auth_header("ghost"))
        assert response.status_code == 404


class TestPasswordReset:
    def test_forgot_then_reset(self, stack):
        seed_alice(stack, password="old-password")

        response = stack.client.post("/api/auth/forgot-password", json={"email": "alice@example.com"})
        assert response.status_code == 200
        code = stack.sender.last_code("alice@example.com")

        response = stack.client.post(
            "/api/auth/reset-password",
            json={"email": "alice@example.com", "code": code, "newPassword": "new-password"},
        )
        assert response.status_code == 200

        login = stack.client.post("/api/auth/token", json={"username": "alice", "password": "new-password"})
        assert login.status_code == 200

    def test_forgot_unknown_email(self, stack):
        response = stack.client.post("/api/auth/forgot-password", json={"email": "nobody@example.com"})
        assert response.status_code == 404

    def test_reset_with_wrong_code(self, stack):
        seed_alice(stack)
        stack.client.post("/api/auth/forgot-password", json={"email": "alice@example.com"})
        code = stack.sender.last_code("alice@example.com")
        wrong = "000000" if code != "000000" else "111111"

        response = stack.client.post(
            "/api/auth/reset-password",
            json={"email": "alice@example.com", "code": wrong, "new_password": "new-password"},
        )
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_VERIFICATION_CODE"

        retry = stack.client.post(
            "/api/auth/reset-password",
            json={"email": "alice@example.com", "code": code, "new_password": "new-password"},
        )
        assert retry.status_code == 400
