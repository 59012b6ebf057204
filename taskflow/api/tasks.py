"""Tasks API router — CRUD and comments."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from taskflow.db.memory import EntityStore
from taskflow.db.session import get_store
from taskflow.schemas.schemas import (
    TaskCreate, TaskUpdate, TaskOut, CommentCreate, CommentOut, UserOut,
)
from taskflow.services.task_service import task_service
from taskflow.services.comment_service import comment_service
from taskflow.services.activity_service import activity_service
from taskflow.core.security import get_current_user
from taskflow.core.exceptions import ResourceNotFoundError
from taskflow.models import User

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskOut])
async def list_tasks(
    project_id: Optional[str] = Query(None, alias="projectId"),
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    """Tasks of one project, or the caller's assigned tasks when no project is given."""
    if project_id:
        return task_service.get_by_project(store, project_id)
    return task_service.get_by_user(store, user.id)


@router.post("", response_model=TaskOut, status_code=201)
async def create_task(
    body: TaskCreate,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    task = task_service.create(store, body, user.id)
    activity_service.log(store, user.id, "task.created", "task", task.id,
                         {"title": task.title})
    return task


@router.get("/{task_id}", response_model=TaskOut)
async def get_task(
    task_id: str,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    task = task_service.get(store, task_id)
    if task is None:
        raise ResourceNotFoundError("Task not found")
    return task


@router.put("/{task_id}", response_model=TaskOut)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    task = task_service.update(store, task_id, body)
    if task is None:
        raise ResourceNotFoundError("Task not found")
    activity_service.log(store, user.id, "task.updated", "task", task.id,
                         body.model_dump(mode="json", by_alias=True, exclude_unset=True))
    return task


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    if not task_service.delete(store, task_id):
        raise ResourceNotFoundError("Task not found")
    activity_service.log(store, user.id, "task.deleted", "task", task_id)
    return Response(status_code=204)


@router.get("/{task_id}/comments", response_model=List[CommentOut])
async def list_comments(
    task_id: str,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    if task_service.get(store, task_id) is None:
        raise ResourceNotFoundError("Task not found")
    return [
        CommentOut.model_validate(comment).model_copy(
            update={"user": UserOut.model_validate(author)}
        )
        for comment, author in comment_service.get_by_task(store, task_id)
    ]


@router.post("/{task_id}/comments", response_model=CommentOut, status_code=201)
async def add_comment(
    task_id: str,
    body: CommentCreate,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    if task_service.get(store, task_id) is None:
        raise ResourceNotFoundError("Task not found")
    comment = comment_service.create(store, task_id, user.id, body.content)
    activity_service.log(store, user.id, "comment.created", "comment", comment.id,
                         {"taskId": task_id})
    return CommentOut.model_validate(comment).model_copy(
        update={"user": UserOut.model_validate(user)}
    )
