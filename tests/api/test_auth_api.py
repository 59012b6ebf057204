"""API tests for authentication and users."""

import logging
from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient

from taskflow.core.security import create_access_token
from taskflow.db.memory import EntityStore
from taskflow.models import User

REGISTRATION = {
    "username": "carol",
    "email": "carol@taskflow.com",
    "password": "secret123",
    "firstName": "Carol",
    "lastName": "Jones",
}


class TestRegister:
    """Tests for POST /api/auth/register."""

    def test_register_returns_token_and_user(self, client: TestClient) -> None:
        """Test a new account gets a token and a password-free profile."""
        response = client.post("/api/auth/register", json=REGISTRATION)

        assert response.status_code == 200
        data = response.json()
        assert data["token"]
        assert data["user"]["username"] == "carol"
        assert data["user"]["firstName"] == "Carol"
        assert data["user"]["role"] == "employee"
        assert "password" not in data["user"]

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
        assert me.status_code == 200
        assert me.json()["id"] == data["user"]["id"]

    @pytest.mark.parametrize("field,message", [
        ("username", "Username already exists"),
        ("email", "Email already exists"),
    ])
    def test_duplicate_rejected(
        self, client: TestClient, store: EntityStore, field: str, message: str
    ) -> None:
        """Test duplicate username or email is a 400 and stores nothing."""
        client.post("/api/auth/register", json=REGISTRATION)
        second = {**REGISTRATION, "username": "carol2", "email": "carol2@taskflow.com"}
        second[field] = REGISTRATION[field]

        response = client.post("/api/auth/register", json=second)

        assert response.status_code == 400
        assert response.json() == {"message": message}
        assert len(store.users) == 1

    def test_validation_error_shape(self, client: TestClient) -> None:
        """Test field-level errors for invalid input."""
        response = client.post(
            "/api/auth/register",
            json={**REGISTRATION, "email": "not-an-email", "password": "123"},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Validation error"
        fields = {err["field"] for err in data["errors"]}
        assert {"email", "password"} <= fields

    @pytest.mark.parametrize("password", ["x" * 100, "é" * 37])
    def test_password_over_bcrypt_limit_rejected(
        self, client: TestClient, store: EntityStore, password: str
    ) -> None:
        """Test passwords longer than 72 UTF-8 bytes are a field error, not a crash."""
        response = client.post("/api/auth/register", json={**REGISTRATION, "password": password})

        assert response.status_code == 400
        assert [err["field"] for err in response.json()["errors"]] == ["password"]
        assert len(store.users) == 0

    def test_password_at_bcrypt_limit_accepted(self, client: TestClient) -> None:
        """Test a 72-byte password registers and logs in."""
        password = "p" * 72
        registered = client.post("/api/auth/register", json={**REGISTRATION, "password": password})
        assert registered.status_code == 200

        login = client.post("/api/auth/login", json={"username": "carol", "password": password})
        assert login.status_code == 200


class TestLogin:
    """Tests for POST /api/auth/login."""

    def test_login_success(self, client: TestClient, alice: User) -> None:
        response = client.post(
            "/api/auth/login", json={"username": "alice", "password": "secret123"}
        )

        assert response.status_code == 200
        assert response.json()["user"]["id"] == alice.id

    def test_login_wrong_password(self, client: TestClient, alice: User) -> None:
        response = client.post(
            "/api/auth/login", json={"username": "alice", "password": "wrongpass"}
        )

        assert response.status_code == 401
        assert response.json() == {"message": "Invalid credentials"}

    def test_login_unknown_user(self, client: TestClient) -> None:
        response = client.post(
            "/api/auth/login", json={"username": "ghost", "password": "secret123"}
        )

        assert response.status_code == 401


class TestAuthGate:
    """Tests for bearer token handling."""

    def test_missing_token(self, client: TestClient) -> None:
        """Test requests without a token are unauthenticated."""
        response = client.get("/api/projects")

        assert response.status_code == 401
        assert response.json() == {"message": "Access token required"}

    def test_invalid_token(self, client: TestClient) -> None:
        """Test garbage tokens are forbidden."""
        response = client.get("/api/projects", headers={"Authorization": "Bearer nonsense"})

        assert response.status_code == 403
        assert response.json() == {"message": "Invalid or expired token"}

    def test_token_for_deleted_user(self, client: TestClient) -> None:
        """Test a valid token whose user is gone is unauthenticated."""
        token = create_access_token({"sub": "no-such-user"})

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401


class TestUsers:
    """Tests for /api/users."""

    def test_list_users_hides_passwords(
        self,
        client: TestClient,
        alice: User,
        bob: User,
        auth_headers: Callable[[User], Dict[str, str]],
    ) -> None:
        response = client.get("/api/users", headers=auth_headers(alice))

        assert response.status_code == 200
        users = response.json()
        assert {u["username"] for u in users} == {"alice", "bob"}
        assert all("password" not in u for u in users)

    def test_update_self(
        self, client: TestClient, alice: User, auth_headers: Callable[[User], Dict[str, str]]
    ) -> None:
        response = client.put(
            f"/api/users/{alice.id}", json={"firstName": "Ally"}, headers=auth_headers(alice)
        )

        assert response.status_code == 200
        assert response.json()["firstName"] == "Ally"
        assert response.json()["lastName"] == "Tester"

    def test_employee_cannot_update_others(
        self,
        client: TestClient,
        alice: User,
        bob: User,
        auth_headers: Callable[[User], Dict[str, str]],
    ) -> None:
        response = client.put(
            f"/api/users/{bob.id}", json={"firstName": "Hacked"}, headers=auth_headers(alice)
        )

        assert response.status_code == 403
        assert response.json() == {"message": "Not authorized to update this user"}
        assert bob.first_name == "Bob"

    def test_scrum_master_can_update_others(
        self,
        client: TestClient,
        alice: User,
        bob: User,
        auth_headers: Callable[[User], Dict[str, str]],
    ) -> None:
        response = client.put(
            f"/api/users/{alice.id}", json={"avatar": "https://img/a.png"},
            headers=auth_headers(bob),
        )

        assert response.status_code == 200
        assert response.json()["avatar"] == "https://img/a.png"

    def test_scrum_master_updating_missing_user(
        self, client: TestClient, bob: User, auth_headers: Callable[[User], Dict[str, str]]
    ) -> None:
        response = client.put(
            "/api/users/missing", json={"firstName": "X"}, headers=auth_headers(bob)
        )

        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}

    def test_password_change_then_login(
        self, client: TestClient, alice: User, auth_headers: Callable[[User], Dict[str, str]]
    ) -> None:
        client.put(
            f"/api/users/{alice.id}", json={"password": "brandnew1"}, headers=auth_headers(alice)
        )

        ok = client.post("/api/auth/login", json={"username": "alice", "password": "brandnew1"})
        old = client.post("/api/auth/login", json={"username": "alice", "password": "secret123"})

        assert ok.status_code == 200
        assert old.status_code == 401

    def test_password_change_over_bcrypt_limit_rejected(
        self, client: TestClient, alice: User, auth_headers: Callable[[User], Dict[str, str]]
    ) -> None:
        response = client.put(
            f"/api/users/{alice.id}", json={"password": "x" * 100}, headers=auth_headers(alice)
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "password"
        login = client.post("/api/auth/login", json={"username": "alice", "password": "secret123"})
        assert login.status_code == 200


class TestAdmin:
    """Tests for /api/admin."""

    def test_stats_requires_scrum_master(
        self,
        client: TestClient,
        alice: User,
        bob: User,
        auth_headers: Callable[[User], Dict[str, str]],
    ) -> None:
        assert client.get("/api/admin/stats", headers=auth_headers(alice)).status_code == 403

        response = client.get("/api/admin/stats", headers=auth_headers(bob))
        assert response.status_code == 200
        assert response.json()["users"] == 2


class TestMeta:
    """Tests for unauthenticated endpoints."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        assert "X-Request-Id" in response.headers

    def test_unknown_route(self, client: TestClient) -> None:
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert "message" in response.json()


class TestRequestLog:
    """Tests for the per-request log line and headers."""

    def test_authenticated_call_tagged_with_user(
        self,
        client: TestClient,
        alice: User,
        auth_headers: Callable[[User], Dict[str, str]],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.INFO, logger="taskflow")

        response = client.get("/api/auth/me", headers=auth_headers(alice))

        assert response.headers["X-User-Id"] == alice.id
        lines = [r.getMessage() for r in caplog.records if "/api/auth/me" in r.getMessage()]
        assert len(lines) == 1
        assert f"user={alice.id}" in lines[0]
        assert response.headers["X-Request-Id"] in lines[0]

    def test_anonymous_call_has_no_user(
        self, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.INFO, logger="taskflow")

        response = client.get("/api/projects")

        assert response.status_code == 401
        assert "X-User-Id" not in response.headers
        lines = [r.getMessage() for r in caplog.records if "/api/projects" in r.getMessage()]
        assert lines and "user=-" in lines[0]
