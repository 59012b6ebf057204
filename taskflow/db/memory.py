"""In-memory entity store: keyed collections with optional secondary indexes."""

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Sequence, TypeVar

from taskflow.models import (
    ActivityLog, Comment, Project, ProjectMember, Task, TimeEntry, User, UserSettings,
)

logger = logging.getLogger("taskflow")

R = TypeVar("R")


class Collection(Generic[R]):
    """Mapping of id -> record kept in insertion order.

    Fields named in ``indexes`` get a value -> ids mapping that is maintained
    on every write, so ``find_by`` on them avoids a full scan. Index buckets
    are dicts used as ordered sets kept in insertion order of the records,
    also across ``replace``, so "first match" means "first inserted" for
    indexed and scanned lookups alike.
    """

    def __init__(self, name: str, indexes: Sequence[str] = ()):
        self.name = name
        self._rows: Dict[str, R] = {}
        self._indexes: Dict[str, Dict[Any, Dict[str, None]]] = {f: {} for f in indexes}
        self._seq: Dict[str, int] = {}
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, record_id: str) -> bool:
        return record_id in self._rows

    def __iter__(self) -> Iterator[R]:
        return iter(list(self._rows.values()))

    def get(self, record_id: str) -> Optional[R]:
        return self._rows.get(record_id)

    def add(self, record: R) -> R:
        record_id = record.id
        if record_id in self._rows:
            raise KeyError(f"{self.name}: duplicate id {record_id}")
        self._rows[record_id] = record
        self._seq[record_id] = next(self._counter)
        self._index(record)
        return record

    def replace(self, record: R) -> R:
        """Store a new version of an existing record under the same id."""
        old = self._rows.get(record.id)
        if old is None:
            raise KeyError(f"{self.name}: unknown id {record.id}")
        self._rows[record.id] = record
        for field, index in self._indexes.items():
            old_value, new_value = getattr(old, field), getattr(record, field)
            if old_value != new_value:
                self._drop(index, old_value, record.id)
                self._insert_ordered(index, new_value, record.id)
        return record

    def remove(self, record_id: str) -> bool:
        old = self._rows.pop(record_id, None)
        if old is None:
            return False
        del self._seq[record_id]
        self._unindex(old)
        return True

    def find_by(self, field: str, value: Any) -> List[R]:
        """All records whose ``field`` equals ``value``."""
        index = self._indexes.get(field)
        if index is None:
            return [r for r in self._rows.values() if getattr(r, field) == value]
        return [self._rows[i] for i in index.get(value, ())]

    def first_by(self, field: str, value: Any) -> Optional[R]:
        matches = self.find_by(field, value)
        return matches[0] if matches else None

    def filter(self, predicate: Callable[[R], bool]) -> List[R]:
        return [r for r in self._rows.values() if predicate(r)]

    def clear(self) -> None:
        self._rows.clear()
        self._seq.clear()
        for index in self._indexes.values():
            index.clear()

    def _index(self, record: R) -> None:
        for field, index in self._indexes.items():
            index.setdefault(getattr(record, field), {})[record.id] = None

    def _unindex(self, record: R) -> None:
        for field, index in self._indexes.items():
            self._drop(index, getattr(record, field), record.id)

    @staticmethod
    def _drop(index: Dict[Any, Dict[str, None]], value: Any, record_id: str) -> None:
        bucket = index.get(value)
        if bucket is None:
            return
        bucket.pop(record_id, None)
        if not bucket:
            del index[value]

    def _insert_ordered(self, index: Dict[Any, Dict[str, None]], value: Any, record_id: str) -> None:
        """Add ``record_id`` to a bucket at its insertion-order position."""
        bucket = index.setdefault(value, {})
        last = next(reversed(bucket), None)
        bucket[record_id] = None
        if last is not None and self._seq[last] > self._seq[record_id]:
            index[value] = dict.fromkeys(sorted(bucket, key=self._seq.__getitem__))


@dataclass
class EntityStore:
    """All collections of the application, alive for the process lifetime."""

    users: Collection[User]
    projects: Collection[Project]
    tasks: Collection[Task]
    time_entries: Collection[TimeEntry]
    comments: Collection[Comment]
    activity_logs: Collection[ActivityLog]
    user_settings: Collection[UserSettings]
    project_members: Collection[ProjectMember]

    @classmethod
    def create(cls) -> "EntityStore":
        """Build an empty store with the standard indexes."""
        store = cls(
            users=Collection("users", indexes=("username", "email")),
            projects=Collection("projects", indexes=("created_by",)),
            tasks=Collection("tasks", indexes=("project_id", "assignee_id")),
            time_entries=Collection("time_entries", indexes=("task_id", "user_id")),
            comments=Collection("comments", indexes=("task_id",)),
            activity_logs=Collection("activity_logs", indexes=("user_id",)),
            user_settings=Collection("user_settings", indexes=("user_id",)),
            project_members=Collection("project_members", indexes=("project_id", "user_id")),
        )
        logger.debug("Entity store created")
        return store

    def collections(self) -> Dict[str, Collection]:
        return {
            "users": self.users,
            "projects": self.projects,
            "tasks": self.tasks,
            "time_entries": self.time_entries,
            "comments": self.comments,
            "activity_logs": self.activity_logs,
            "user_settings": self.user_settings,
            "project_members": self.project_members,
        }

    def stats(self) -> Dict[str, int]:
        """Row count per collection."""
        return {name: len(c) for name, c in self.collections().items()}
