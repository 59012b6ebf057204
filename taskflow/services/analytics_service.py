"""Analytics service — task metrics and dashboard insights.

Only ``completed_tasks`` and ``overdue_tasks`` are derived from stored data.
The remaining figures are configured placeholders until real time-series
analytics exist.
"""

from datetime import datetime
from typing import Dict, Any, Optional

from taskflow.core.config import settings
from taskflow.db.memory import EntityStore
from taskflow.models import TaskStatus
from taskflow.models.base import utcnow


class AnalyticsService:

    @staticmethod
    def get_task_metrics(
        store: EntityStore,
        user_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Completed and overdue counts, over the user's assigned tasks or all tasks."""
        now = now or utcnow()
        tasks = store.tasks.find_by("assignee_id", user_id) if user_id else list(store.tasks)

        completed = sum(1 for t in tasks if t.status == TaskStatus.done)
        overdue = sum(1 for t in tasks if t.is_overdue(now))

        return {
            "completed_tasks": completed,
            "avg_completion_time": settings.ANALYTICS_AVG_COMPLETION_TIME,
            "team_productivity": settings.ANALYTICS_TEAM_PRODUCTIVITY,
            "overdue_tasks": overdue,
        }

    @staticmethod
    def get_dashboard_insights(store: EntityStore, user_id: Optional[str] = None) -> Dict[str, Any]:
        return {
            "focus_time": settings.INSIGHTS_FOCUS_TIME,
            "completion_rate": settings.INSIGHTS_COMPLETION_RATE,
            "team_velocity": settings.INSIGHTS_TEAM_VELOCITY,
            "best_work_hours": settings.INSIGHTS_BEST_WORK_HOURS,
        }


analytics_service = AnalyticsService()
