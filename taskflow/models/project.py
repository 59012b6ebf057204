"""Project and ProjectMember records."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from taskflow.models.base import ProjectStatus, new_id, utcnow


@dataclass
class Project:
    """Project owned by its creator and visible to its members."""
    name: str
    created_by: str
    description: Optional[str] = None
    status: ProjectStatus = ProjectStatus.planning
    deadline: Optional[datetime] = None
    progress: int = 0
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class ProjectMember:
    """Association granting a user visibility into a project they did not create."""
    project_id: str
    user_id: str
    role: str = "member"
    id: str = field(default_factory=new_id)
    joined_at: datetime = field(default_factory=utcnow)
