"""Pydantic schemas for API request/response serialization.

The wire format is camelCase; Python attribute names stay snake_case so the
schemas validate straight from the store's records.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, ClassVar, Dict, FrozenSet, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel

from taskflow.models import UserRole, ProjectStatus, TaskStatus, TaskPriority


def _as_utc(value: datetime) -> datetime:
    # naive timestamps from clients are taken as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _fits_bcrypt(value: str) -> str:
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    return value


Password = Annotated[str, Field(min_length=6), AfterValidator(_fits_bcrypt)]
Progress = Annotated[int, Field(ge=0, le=100)]


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PatchModel(ApiModel):
    """Explicit partial update: only fields the client sent are applied.

    Fields listed in ``NULLABLE`` may be cleared with an explicit null;
    sending null for any other field is a validation error.
    """

    NULLABLE: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_for_required(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.NULLABLE:
                raise ValueError(f"{to_camel(name)} may not be null")
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


# ---- Auth ----
class LoginRequest(ApiModel):
    username: str = Field(..., min_length=1)
    password: Password


class RegisterRequest(ApiModel):
    username: str = Field(..., min_length=1)
    email: EmailStr
    password: Password
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    avatar: Optional[str] = None
    role: UserRole = UserRole.employee


# ---- User ----
class UserOut(ApiModel):
    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    avatar: Optional[str] = None
    role: UserRole
    created_at: datetime
    updated_at: datetime


class UserUpdate(PatchModel):
    NULLABLE: ClassVar[FrozenSet[str]] = frozenset({"avatar"})

    username: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[Password] = None
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    avatar: Optional[str] = None
    role: Optional[UserRole] = None


class TokenResponse(ApiModel):
    token: str
    user: UserOut


# ---- Project ----
class ProjectCreate(ApiModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: ProjectStatus = ProjectStatus.planning
    deadline: Optional[UtcDatetime] = None
    progress: Progress = 0


class ProjectUpdate(PatchModel):
    NULLABLE: ClassVar[FrozenSet[str]] = frozenset({"description", "deadline"})

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None
    deadline: Optional[UtcDatetime] = None
    progress: Optional[Progress] = None


class ProjectOut(ApiModel):
    id: str
    name: str
    description: Optional[str] = None
    status: ProjectStatus
    deadline: Optional[datetime] = None
    progress: int
    created_by: str
    created_at: datetime
    updated_at: datetime


class ProjectMemberAdd(ApiModel):
    user_id: str
    role: str = "member"


class ProjectMemberOut(ApiModel):
    id: str
    project_id: str
    user_id: str
    role: str
    joined_at: datetime
    user: Optional[UserOut] = None


# ---- Task ----
class TaskCreate(ApiModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.todo
    priority: TaskPriority = TaskPriority.medium
    due_date: Optional[UtcDatetime] = None
    progress: Progress = 0
    project_id: Optional[str] = None
    assignee_id: Optional[str] = None


class TaskUpdate(PatchModel):
    NULLABLE: ClassVar[FrozenSet[str]] = frozenset(
        {"description", "due_date", "project_id", "assignee_id"}
    )

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[UtcDatetime] = None
    progress: Optional[Progress] = None
    project_id: Optional[str] = None
    assignee_id: Optional[str] = None


class TaskOut(ApiModel):
    id: str
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None
    progress: int
    project_id: Optional[str] = None
    assignee_id: Optional[str] = None
    created_by: str
    created_at: datetime
    updated_at: datetime


# ---- Comment ----
class CommentCreate(ApiModel):
    content: str = Field(..., min_length=1)


class CommentOut(ApiModel):
    id: str
    task_id: str
    user_id: str
    content: str
    created_at: datetime
    user: Optional[UserOut] = None


# ---- Time entry ----
class TimeEntryCreate(ApiModel):
    task_id: str
    start_time: UtcDatetime
    end_time: Optional[UtcDatetime] = None
    duration: int = Field(0, ge=0)
    description: Optional[str] = None


class TimeEntryUpdate(PatchModel):
    NULLABLE: ClassVar[FrozenSet[str]] = frozenset({"end_time", "description"})

    start_time: Optional[UtcDatetime] = None
    end_time: Optional[UtcDatetime] = None
    duration: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None


class TimeEntryOut(ApiModel):
    id: str
    task_id: str
    user_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: int
    description: Optional[str] = None
    created_at: datetime


# ---- Activity ----
class ActivityLogOut(ApiModel):
    id: str
    user_id: str
    action: str
    resource_type: str
    resource_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    created_at: datetime


# ---- Settings ----
class SettingsUpdate(PatchModel):
    theme: Optional[str] = Field(None, min_length=1)
    notifications: Optional[Dict[str, bool]] = None
    timezone: Optional[str] = Field(None, min_length=1)


class SettingsOut(ApiModel):
    id: str
    user_id: str
    theme: str
    notifications: Dict[str, bool]
    timezone: str
    updated_at: datetime


# ---- Analytics ----
class TaskMetricsOut(ApiModel):
    completed_tasks: int
    avg_completion_time: float
    team_productivity: int
    overdue_tasks: int


class InsightsOut(ApiModel):
    focus_time: str
    completion_rate: int
    team_velocity: int
    best_work_hours: str
