"""Task service — CRUD and the two listing modes (by project, by assignee)."""

import dataclasses
from typing import List, Optional

from taskflow.db.memory import EntityStore
from taskflow.models import Task
from taskflow.models.base import utcnow
from taskflow.schemas.schemas import TaskCreate, TaskUpdate


class TaskService:
    """Manages tasks shown on the kanban board and calendar."""

    @staticmethod
    def create(store: EntityStore, body: TaskCreate, created_by: str) -> Task:
        task = Task(**body.model_dump(), created_by=created_by)
        return store.tasks.add(task)

    @staticmethod
    def get(store: EntityStore, task_id: str) -> Optional[Task]:
        return store.tasks.get(task_id)

    @staticmethod
    def get_by_project(store: EntityStore, project_id: str) -> List[Task]:
        return store.tasks.find_by("project_id", project_id)

    @staticmethod
    def get_by_user(store: EntityStore, user_id: str) -> List[Task]:
        """Tasks assigned to the user."""
        return store.tasks.find_by("assignee_id", user_id)

    @staticmethod
    def update(store: EntityStore, task_id: str, patch: TaskUpdate) -> Optional[Task]:
        task = store.tasks.get(task_id)
        if task is None:
            return None
        updated = dataclasses.replace(
            task, **patch.changes(), updated_at=max(utcnow(), task.updated_at)
        )
        return store.tasks.replace(updated)

    @staticmethod
    def delete(store: EntityStore, task_id: str) -> bool:
        return store.tasks.remove(task_id)


task_service = TaskService()
