"""Project service — CRUD, visibility and membership."""

import dataclasses
import logging
from typing import List, Optional, Tuple

from taskflow.db.memory import EntityStore
from taskflow.models import Project, ProjectMember, User
from taskflow.models.base import utcnow
from taskflow.schemas.schemas import ProjectCreate, ProjectUpdate

logger = logging.getLogger("taskflow")


class ProjectService:
    """Manages projects and the members who can see them."""

    @staticmethod
    def create(store: EntityStore, body: ProjectCreate, created_by: str) -> Project:
        """Create a new project owned by ``created_by``."""
        project = Project(**body.model_dump(), created_by=created_by)
        return store.projects.add(project)

    @staticmethod
    def get(store: EntityStore, project_id: str) -> Optional[Project]:
        return store.projects.get(project_id)

    @staticmethod
    def get_for_user(store: EntityStore, user_id: str) -> List[Project]:
        """Projects the user created, followed by projects they are a member of.

        A project that is both owned and membered is listed once.
        """
        projects = {p.id: p for p in store.projects.find_by("created_by", user_id)}
        for member in store.project_members.find_by("user_id", user_id):
            project = store.projects.get(member.project_id)
            if project is not None and project.id not in projects:
                projects[project.id] = project
        return list(projects.values())

    @staticmethod
    def is_visible_to(store: EntityStore, project: Project, user_id: str) -> bool:
        if project.created_by == user_id:
            return True
        return any(
            m.user_id == user_id
            for m in store.project_members.find_by("project_id", project.id)
        )

    @staticmethod
    def update(store: EntityStore, project_id: str, patch: ProjectUpdate) -> Optional[Project]:
        project = store.projects.get(project_id)
        if project is None:
            return None
        updated = dataclasses.replace(
            project, **patch.changes(), updated_at=max(utcnow(), project.updated_at)
        )
        return store.projects.replace(updated)

    @staticmethod
    def delete(store: EntityStore, project_id: str) -> bool:
        """Remove a project and its member rows. Tasks keep their dangling project_id."""
        if not store.projects.remove(project_id):
            return False
        for member in store.project_members.find_by("project_id", project_id):
            store.project_members.remove(member.id)
        logger.info("Deleted project %s", project_id)
        return True

    @staticmethod
    def add_member(
        store: EntityStore, project_id: str, user_id: str, role: str = "member"
    ) -> ProjectMember:
        """Grant a user visibility into a project. Re-adding returns the existing row."""
        for member in store.project_members.find_by("project_id", project_id):
            if member.user_id == user_id:
                return member
        member = ProjectMember(project_id=project_id, user_id=user_id, role=role)
        return store.project_members.add(member)

    @staticmethod
    def get_members(store: EntityStore, project_id: str) -> List[Tuple[ProjectMember, User]]:
        """Members joined with their user; rows whose user is gone are skipped."""
        members = []
        for member in store.project_members.find_by("project_id", project_id):
            user = store.users.get(member.user_id)
            if user is not None:
                members.append((member, user))
        return members


project_service = ProjectService()
