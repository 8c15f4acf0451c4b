"""
Tests for the user endpoints.
"""

from shared.models import Role

from tests.conftest import auth_header


def register(stack, username: str = "alice", email: str = "alice@example.com"):
    return stack.client.post(
        "/api/users",
        json={"username": username, "email": email, "password": "secret", "full_name": "Alice"},
    )


class TestRegister:
    def test_register_creates_student(self, stack):
        response = register(stack)
        assert response.status_code == 201
        body = response.json()
        assert body["role"] == "STUDENT"
        assert body["balance"] == 0.0
        assert "password" not in body and "password_hash" not in body

    def test_duplicate_username(self, stack):
        register(stack)
        response = register(stack, email="other@example.com")
        assert response.status_code == 409
        assert response.json()["error"] == "USER_EXISTED"

    def test_duplicate_email(self, stack):
        register(stack)
        response = register(stack, username="alice2")
        assert response.status_code == 409
        assert response.json()["error"] == "EMAIL_EXISTED"

    def test_invalid_payload(self, stack):
        response = stack.client.post("/api/users", json={"username": "al", "email": "nope", "password": "x"})
        assert response.status_code == 422


class TestAdminOrSelf:
    def test_self_read_and_other_denied(self, stack):
        alice_id = register(stack).json()["id"]
        bob = stack.users.add("bob")

        own = stack.client.get(f"/api/users/{alice_id}", headers=auth_header("alice"))
        assert own.status_code == 200

        other = stack.client.get(f"/api/users/{bob.id}", headers=auth_header("alice"))
        assert other.status_code == 403
        assert other.json()["error"] == "ACCESS_DENIED"

    def test_admin_reads_anyone(self, stack):
        stack.users.add("root", Role.ADMIN)
        bob = stack.users.add("bob")
        response = stack.client.get(f"/api/users/{bob.id}", headers=auth_header("root", Role.ADMIN))
        assert response.status_code == 200
        assert response.json()["username"] == "bob"

    def test_missing_user(self, stack):
        stack.users.add("root", Role.ADMIN)
        response = stack.client.get("/api/users/999", headers=auth_header("root", Role.ADMIN))
        assert response.status_code == 404

    def test_update_self(self, stack):
        alice_id = register(stack).json()["id"]
        response = stack.client.put(
            f"/api/users/{alice_id}",
            json={"email": "new@example.com", "full_name": "Alice B", "password": "changed"},
            headers=auth_header("alice"),
        )
        assert response.status_code == 200
        assert response.json()["email"] == "new@example.com"

    def test_delete_self(self, stack):
        alice_id = register(stack).json()["id"]
        response = stack.client.delete(f"/api/users/{alice_id}", headers=auth_header("alice"))
        assert response.status_code == 200
        assert stack.users.get_by_id(alice_id) is None


class TestAssignRole:
    def test_student_becomes_teacher_after_new_login(self, stack):
        """The new role only takes effect with a freshly issued token."""
        alice_id = register(stack).json()["id"]
        student_headers = auth_header("alice", Role.STUDENT)

        response = stack.client.post(
            f"/api/users/{alice_id}/assign-role", json={"role": "TEACHER"}, headers=student_headers
        )
        assert response.status_code == 200
        assert response.json() == {"message": "Change role to TEACHER completed!"}

        course = {"title": "Python", "price": "10"}
        assert stack.client.post("/api/courses", data=course, headers=student_headers).status_code == 403

        login = stack.client.post("/api/auth/token", json={"username": "alice", "password": "secret"})
        fresh = {"Authorization": f"Bearer {login.json()['token']}"}
        assert stack.client.post("/api/courses", data=course, headers=fresh).status_code == 201

    def test_admin_role_cannot_be_assigned(self, stack):
        alice_id = register(stack).json()["id"]
        response = stack.client.post(
            f"/api/users/{alice_id}/assign-role", json={"role": "ADMIN"}, headers=auth_header("alice")
        )
        assert response.status_code == 400
        assert response.json()["error"] == "ROLE_NOT_EXISTED"
        assert stack.users.get_by_id(alice_id).role == Role.STUDENT
