"""Activity log record — append-only."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any

from taskflow.models.base import new_id, utcnow


@dataclass
class ActivityLog:
    """What a user did to which resource.

    Never updated or deleted once written (enforced at service level).
    """
    user_id: str
    action: str  # e.g. "task.created"
    resource_type: str  # project, task, time_entry, comment
    resource_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
