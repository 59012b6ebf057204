"""Models package — record types held by the in-memory entity store."""

from taskflow.models.base import UserRole, ProjectStatus, TaskStatus, TaskPriority
from taskflow.models.user import User, UserSettings
from taskflow.models.project import Project, ProjectMember
from taskflow.models.task import Task, Comment
from taskflow.models.time_entry import TimeEntry
from taskflow.models.activity_log import ActivityLog

__all__ = [
    "UserRole", "ProjectStatus", "TaskStatus", "TaskPriority",
    "User", "UserSettings", "Project", "ProjectMember",
    "Task", "Comment", "TimeEntry", "ActivityLog",
]
