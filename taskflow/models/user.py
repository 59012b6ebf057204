"""User and UserSettings records."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict

from taskflow.models.base import UserRole, new_id, utcnow


@dataclass
class User:
    """Team member who can own projects and be assigned tasks.

    ``password`` always holds the bcrypt hash, never the plaintext.
    """
    username: str
    email: str
    password: str
    first_name: str
    last_name: str
    avatar: Optional[str] = None
    role: UserRole = UserRole.employee
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


def default_notifications() -> Dict[str, bool]:
    return {"email": True, "push": True, "mentions": True}


@dataclass
class UserSettings:
    """Per-user preferences, at most one row per user."""
    user_id: str
    theme: str = "light"
    notifications: Dict[str, bool] = field(default_factory=default_notifications)
    timezone: str = "UTC"
    id: str = field(default_factory=new_id)
    updated_at: datetime = field(default_factory=utcnow)
