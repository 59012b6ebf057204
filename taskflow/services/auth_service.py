"""Auth service — registration, login, user management."""

import dataclasses
import logging
from typing import List, Optional, Tuple

from taskflow.db.memory import EntityStore
from taskflow.models import User, UserRole
from taskflow.models.base import utcnow
from taskflow.schemas.schemas import RegisterRequest, UserUpdate
from taskflow.core.security import hash_password, verify_password, create_user_token
from taskflow.core.exceptions import AuthenticationError, ResourceConflictError

logger = logging.getLogger("taskflow")


class AuthService:
    """Handles authentication and user management."""

    @staticmethod
    def get_user(store: EntityStore, user_id: str) -> Optional[User]:
        return store.users.get(user_id)

    @staticmethod
    def get_user_by_username(store: EntityStore, username: str) -> Optional[User]:
        """First user with this username, in insertion order."""
        return store.users.first_by("username", username)

    @staticmethod
    def get_user_by_email(store: EntityStore, email: str) -> Optional[User]:
        """First user with this email, in insertion order."""
        return store.users.first_by("email", email)

    @staticmethod
    def list_users(store: EntityStore) -> List[User]:
        return list(store.users)

    @staticmethod
    def create_user(
        store: EntityStore,
        username: str,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        avatar: Optional[str] = None,
        role: UserRole = UserRole.employee,
    ) -> User:
        """Create a new user, storing only the password hash.

        Raises:
            ResourceConflictError: If the username or email is taken.
        """
        if AuthService.get_user_by_username(store, username):
            raise ResourceConflictError("Username already exists")
        if AuthService.get_user_by_email(store, email):
            raise ResourceConflictError("Email already exists")

        user = User(
            username=username,
            email=email,
            password=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            avatar=avatar,
            role=UserRole(role),
        )
        store.users.add(user)
        logger.info("Created user %s (%s)", user.username, user.role.value)
        return user

    @staticmethod
    def update_user(store: EntityStore, user_id: str, patch: UserUpdate) -> Optional[User]:
        """Apply a partial update; a new password is re-hashed before it is stored.

        Raises:
            ResourceConflictError: If the new username or email belongs to another user.
        """
        user = store.users.get(user_id)
        if user is None:
            return None

        changes = patch.changes()
        for field in ("username", "email"):
            if field in changes:
                holder = store.users.first_by(field, changes[field])
                if holder is not None and holder.id != user_id:
                    raise ResourceConflictError(f"{field.capitalize()} already exists")
        if "password" in changes:
            changes["password"] = hash_password(changes["password"])

        updated = dataclasses.replace(
            user, **changes, updated_at=max(utcnow(), user.updated_at)
        )
        return store.users.replace(updated)

    @staticmethod
    def authenticate(store: EntityStore, username: str, password: str) -> User:
        """Check a username/password pair.

        Raises:
            AuthenticationError: If credentials are invalid.
        """
        user = AuthService.get_user_by_username(store, username)
        if not user or not verify_password(password, user.password):
            raise AuthenticationError("Invalid credentials")
        return user

    @staticmethod
    def register(store: EntityStore, body: RegisterRequest) -> Tuple[str, User]:
        """Create an account and return a token for it."""
        user = AuthService.create_user(
            store,
            username=body.username,
            email=body.email,
            password=body.password,
            first_name=body.first_name,
            last_name=body.last_name,
            avatar=body.avatar,
            role=body.role,
        )
        return create_user_token(user), user

    @staticmethod
    def login(store: EntityStore, username: str, password: str) -> Tuple[str, User]:
        user = AuthService.authenticate(store, username, password)
        return create_user_token(user), user


auth_service = AuthService()
