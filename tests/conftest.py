"""Shared fixtures: isolated entity stores, users and an API client."""

from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient

from taskflow.core.security import create_user_token
from taskflow.db.memory import EntityStore
from taskflow.main import create_app
from taskflow.models import User, UserRole
from taskflow.services.auth_service import auth_service

PASSWORD = "secret123"


@pytest.fixture
def store() -> EntityStore:
    """Create an empty, unseeded store."""
    return EntityStore.create()


@pytest.fixture
def make_user(store: EntityStore) -> Callable[..., User]:
    """Factory that stores a user with the shared test password."""

    def _make(username: str, role: UserRole = UserRole.employee) -> User:
        return auth_service.create_user(
            store,
            username=username,
            email=f"{username}@taskflow.com",
            password=PASSWORD,
            first_name=username.capitalize(),
            last_name="Tester",
            role=role,
        )

    return _make


@pytest.fixture
def alice(make_user: Callable[..., User]) -> User:
    return make_user("alice")


@pytest.fixture
def bob(make_user: Callable[..., User]) -> User:
    return make_user("bob", UserRole.scrum_master)


@pytest.fixture
def client(store: EntityStore) -> TestClient:
    """Create test client bound to the isolated store."""
    return TestClient(create_app(store))


@pytest.fixture
def auth_headers() -> Callable[[User], Dict[str, str]]:
    """Build bearer headers for a stored user."""

    def _headers(user: User) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_user_token(user)}"}

    return _headers
