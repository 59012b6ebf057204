"""Shared helpers and enumerations for in-memory records."""

import enum
import uuid
from datetime import datetime, timezone


def new_id() -> str:
    """Generate an opaque unique record id."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, enum.Enum):
    scrum_master = "scrum_master"
    employee = "employee"


class ProjectStatus(str, enum.Enum):
    planning = "planning"
    active = "active"
    completed = "completed"


class TaskStatus(str, enum.Enum):
    todo = "todo"
    in_progress = "in_progress"
    review = "review"
    done = "done"


class TaskPriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"
