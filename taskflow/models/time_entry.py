"""Time tracking record."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from taskflow.models.base import new_id, utcnow


@dataclass
class TimeEntry:
    """Timer run against a task. ``end_time`` is None while the timer is running."""
    task_id: str
    user_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: int = 0  # seconds
    description: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)

    @property
    def is_active(self) -> bool:
        return self.end_time is None
