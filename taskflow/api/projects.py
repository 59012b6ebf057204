"""Projects API router — CRUD and members."""

from typing import List

from fastapi import APIRouter, Depends, Response

from taskflow.db.memory import EntityStore
from taskflow.db.session import get_store
from taskflow.schemas.schemas import (
    ProjectCreate, ProjectUpdate, ProjectOut,
    ProjectMemberAdd, ProjectMemberOut, UserOut,
)
from taskflow.services.project_service import project_service
from taskflow.services.auth_service import auth_service
from taskflow.services.activity_service import activity_service
from taskflow.core.security import get_current_user
from taskflow.core.exceptions import AuthorizationError, ResourceNotFoundError
from taskflow.models import User

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=List[ProjectOut])
async def list_projects(
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    """Projects the caller created or was added to."""
    return project_service.get_for_user(store, user.id)


@router.post("", response_model=ProjectOut, status_code=201)
async def create_project(
    body: ProjectCreate,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    project = project_service.create(store, body, user.id)
    activity_service.log(store, user.id, "project.created", "project", project.id,
                         {"name": project.name})
    return project


@router.get("/{project_id}", response_model=ProjectOut)
async def get_project(
    project_id: str,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    project = project_service.get(store, project_id)
    if project is None:
        raise ResourceNotFoundError("Project not found")
    return project


@router.put("/{project_id}", response_model=ProjectOut)
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    project = project_service.update(store, project_id, body)
    if project is None:
        raise ResourceNotFoundError("Project not found")
    activity_service.log(store, user.id, "project.updated", "project", project.id,
                         body.model_dump(mode="json", by_alias=True, exclude_unset=True))
    return project


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: str,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    if not project_service.delete(store, project_id):
        raise ResourceNotFoundError("Project not found")
    activity_service.log(store, user.id, "project.deleted", "project", project_id)
    return Response(status_code=204)


@router.get("/{project_id}/members", response_model=List[ProjectMemberOut])
async def list_members(
    project_id: str,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    if project_service.get(store, project_id) is None:
        raise ResourceNotFoundError("Project not found")
    return [
        ProjectMemberOut.model_validate(member).model_copy(
            update={"user": UserOut.model_validate(member_user)}
        )
        for member, member_user in project_service.get_members(store, project_id)
    ]


@router.post("/{project_id}/members", response_model=ProjectMemberOut, status_code=201)
async def add_member(
    project_id: str,
    body: ProjectMemberAdd,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    """Give another user visibility into a project the caller can see."""
    project = project_service.get(store, project_id)
    if project is None:
        raise ResourceNotFoundError("Project not found")
    if not project_service.is_visible_to(store, project, user.id):
        raise AuthorizationError("Not a member of this project")
    member_user = auth_service.get_user(store, body.user_id)
    if member_user is None:
        raise ResourceNotFoundError("User not found")

    member = project_service.add_member(store, project_id, body.user_id, body.role)
    activity_service.log(store, user.id, "project.member_added", "project", project_id,
                         {"userId": body.user_id, "role": member.role})
    return ProjectMemberOut.model_validate(member).model_copy(
        update={"user": UserOut.model_validate(member_user)}
    )
