"""Task and Comment records."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from taskflow.models.base import TaskStatus, TaskPriority, new_id, utcnow


@dataclass
class Task:
    """Unit of work shown on the kanban board and calendar.

    ``project_id`` and ``assignee_id`` are weak references: nothing stops
    them from pointing at deleted rows.
    """
    title: str
    created_by: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.todo
    priority: TaskPriority = TaskPriority.medium
    due_date: Optional[datetime] = None
    progress: int = 0
    project_id: Optional[str] = None
    assignee_id: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def is_overdue(self, now: datetime) -> bool:
        return (
            self.due_date is not None
            and self.due_date < now
            and self.status != TaskStatus.done
        )


@dataclass
class Comment:
    task_id: str
    user_id: str
    content: str
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
