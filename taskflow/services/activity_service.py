"""Activity service — append-only trail of user actions."""

from typing import Optional, Any, Dict, List

from taskflow.db.memory import EntityStore
from taskflow.models import ActivityLog


class ActivityService:
    """Records activity log entries for project, task and time-entry mutations."""

    @staticmethod
    def log(
        store: EntityStore,
        user_id: str,
        action: str,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> ActivityLog:
        """Write a single activity log record.

        Args:
            action: e.g. "task.created", "project.deleted", "time_entry.updated"
            resource_type: project, task, time_entry, comment
        """
        entry = ActivityLog(
            user_id=user_id,
            action=action,
            resource_type=resource_type,
            resource_id=str(resource_id) if resource_id else None,
            details=details or None,
        )
        return store.activity_logs.add(entry)

    @staticmethod
    def get_by_user(store: EntityStore, user_id: str) -> List[ActivityLog]:
        return store.activity_logs.find_by("user_id", user_id)


activity_service = ActivityService()
