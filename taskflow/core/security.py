"""JWT authentication and role-check helpers."""

import bcrypt
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from taskflow.core.config import settings
from taskflow.core.exceptions import unauthorized
from taskflow.db.memory import EntityStore
from taskflow.db.session import get_store
from taskflow.models import User

# JWT bearer scheme
security_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pwd_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pwd_bytes = plain_password.encode("utf-8")
    hashed_bytes = hashed_password.encode("utf-8")
    try:
        return bcrypt.checkpw(pwd_bytes, hashed_bytes)
    except ValueError:
        # malformed hash
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRY_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def create_user_token(user: User) -> str:
    return create_access_token({"sub": user.id, "username": user.username})


def decode_token(token: str) -> dict:
    """Decode and validate a JWT token."""
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        )


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
) -> str:
    """Extract user_id from the JWT Bearer token."""
    if credentials is None:
        raise unauthorized("Access token required")
    payload = decode_token(credentials.credentials)
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token payload",
        )
    return str(user_id)


async def get_current_user(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    store: EntityStore = Depends(get_store),
) -> User:
    """Resolve the bearer token to a stored user.

    The id is also left on ``request.state`` for the request log.
    """
    user = store.users.get(user_id)
    if user is None:
        raise unauthorized("User no longer exists")
    request.state.user_id = user.id
    return user


class RequireRole:
    """Dependency that checks if the user has a required role level."""

    ROLE_LEVELS = {
        "employee": 20,
        "scrum_master": 60,
    }

    def __init__(self, min_role: str):
        self.min_role = min_role
        self.min_level = self.ROLE_LEVELS.get(min_role, 0)

    async def __call__(self, user: User = Depends(get_current_user)) -> User:
        user_level = self.ROLE_LEVELS.get(user.role.value, 0)
        if user_level < self.min_level:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{user.role.value}' insufficient. Requires {self.min_role}.",
            )
        return user


def can_manage_user(actor: User, target_id: str) -> bool:
    """Users may edit their own profile; scrum masters may edit anyone's."""
    return actor.id == target_id or actor.role.value == "scrum_master"


# Convenience dependency factories
require_scrum_master = RequireRole("scrum_master")
