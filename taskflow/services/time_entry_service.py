"""Time tracking service — timers and their accumulated durations."""

import dataclasses
import logging
from typing import List, Optional

from taskflow.db.memory import EntityStore
from taskflow.models import TimeEntry
from taskflow.schemas.schemas import TimeEntryCreate, TimeEntryUpdate
from taskflow.core.exceptions import ResourceConflictError

logger = logging.getLogger("taskflow")


class TimeEntryService:
    """Manages time entries. A user has at most one running timer."""

    @staticmethod
    def create(store: EntityStore, body: TimeEntryCreate, user_id: str) -> TimeEntry:
        """Record a time entry; without an end time it starts a timer.

        Raises:
            ResourceConflictError: If the user already has a running timer.
        """
        if body.end_time is None:
            active = TimeEntryService.get_active(store, user_id)
            if active is not None:
                raise ResourceConflictError(
                    f"Time entry {active.id} is still running; stop it first"
                )
        entry = TimeEntry(**body.model_dump(), user_id=user_id)
        store.time_entries.add(entry)
        logger.debug("Time entry %s for task %s by %s", entry.id, entry.task_id, user_id)
        return entry

    @staticmethod
    def get(store: EntityStore, entry_id: str) -> Optional[TimeEntry]:
        return store.time_entries.get(entry_id)

    @staticmethod
    def get_by_task(store: EntityStore, task_id: str) -> List[TimeEntry]:
        return store.time_entries.find_by("task_id", task_id)

    @staticmethod
    def get_by_user(store: EntityStore, user_id: str) -> List[TimeEntry]:
        return store.time_entries.find_by("user_id", user_id)

    @staticmethod
    def get_active(store: EntityStore, user_id: str) -> Optional[TimeEntry]:
        """The user's running entry, first in insertion order if several exist."""
        for entry in store.time_entries.find_by("user_id", user_id):
            if entry.is_active:
                return entry
        return None

    @staticmethod
    def update(store: EntityStore, entry_id: str, patch: TimeEntryUpdate) -> Optional[TimeEntry]:
        """Apply a partial update, e.g. stop a timer by setting end_time and duration.

        Raises:
            ResourceConflictError: If clearing end_time would give the user a
                second running timer.
        """
        entry = store.time_entries.get(entry_id)
        if entry is None:
            return None
        changes = patch.changes()
        if "end_time" in changes and changes["end_time"] is None and not entry.is_active:
            active = TimeEntryService.get_active(store, entry.user_id)
            if active is not None:
                raise ResourceConflictError(
                    f"Time entry {active.id} is still running; stop it first"
                )
        return store.time_entries.replace(dataclasses.replace(entry, **changes))


time_entry_service = TimeEntryService()
