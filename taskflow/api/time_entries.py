"""Time tracking API router."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from taskflow.db.memory import EntityStore
from taskflow.db.session import get_store
from taskflow.schemas.schemas import TimeEntryCreate, TimeEntryUpdate, TimeEntryOut
from taskflow.services.time_entry_service import time_entry_service
from taskflow.services.activity_service import activity_service
from taskflow.core.security import get_current_user
from taskflow.core.exceptions import ResourceNotFoundError
from taskflow.models import User

router = APIRouter(prefix="/time-entries", tags=["time-entries"])


@router.get("", response_model=List[TimeEntryOut])
async def list_time_entries(
    task_id: Optional[str] = Query(None, alias="taskId"),
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    """Entries of one task, or the caller's own entries when no task is given."""
    if task_id:
        return time_entry_service.get_by_task(store, task_id)
    return time_entry_service.get_by_user(store, user.id)


@router.get("/active", response_model=Optional[TimeEntryOut])
async def get_active_time_entry(
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    """The caller's running timer, or null."""
    return time_entry_service.get_active(store, user.id)


@router.post("", response_model=TimeEntryOut, status_code=201)
async def create_time_entry(
    body: TimeEntryCreate,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    """Log time against a task; omitting endTime starts a timer."""
    entry = time_entry_service.create(store, body, user.id)
    activity_service.log(store, user.id, "time_entry.created", "time_entry", entry.id,
                         {"taskId": entry.task_id})
    return entry


@router.put("/{entry_id}", response_model=TimeEntryOut)
async def update_time_entry(
    entry_id: str,
    body: TimeEntryUpdate,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    entry = time_entry_service.update(store, entry_id, body)
    if entry is None:
        raise ResourceNotFoundError("Time entry not found")
    activity_service.log(store, user.id, "time_entry.updated", "time_entry", entry.id,
                         body.model_dump(mode="json", by_alias=True, exclude_unset=True))
    return entry
