"""Seed demo users, projects and tasks into a fresh store."""

import logging
from datetime import datetime, timezone

from taskflow.core.config import settings
from taskflow.db.memory import EntityStore
from taskflow.models import (
    Project, ProjectStatus, Task, TaskPriority, TaskStatus, User, UserRole,
)
from taskflow.core.security import hash_password

logger = logging.getLogger("taskflow")


def _date(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


def seed_demo_data(store: EntityStore) -> None:
    """Insert the demo team if the store has no users yet."""
    if len(store.users):
        logger.info("Store already has users, skipping demo seed")
        return

    # one hash shared by both demo accounts
    hashed = hash_password(settings.DEMO_PASSWORD)

    john = store.users.add(User(
        username="johndoe",
        email="john.doe@taskflow.com",
        password=hashed,
        first_name="John",
        last_name="Doe",
        avatar="https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=150&h=150",
        role=UserRole.scrum_master,
    ))
    sarah = store.users.add(User(
        username="sarahjohnson",
        email="sarah.johnson@taskflow.com",
        password=hashed,
        first_name="Sarah",
        last_name="Johnson",
        role=UserRole.employee,
    ))

    ecommerce = store.projects.add(Project(
        name="E-commerce Platform",
        description="Building a modern e-commerce platform with React and Node.js",
        status=ProjectStatus.active,
        deadline=_date("2024-12-15"),
        progress=75,
        created_by=john.id,
    ))
    mobile = store.projects.add(Project(
        name="Mobile App Redesign",
        description="Redesigning the mobile application for better user experience",
        status=ProjectStatus.active,
        deadline=_date("2025-01-08"),
        progress=45,
        created_by=john.id,
    ))

    demo_tasks = [
        ("Implement OAuth integration", "Set up social login with Google and GitHub",
         TaskStatus.todo, TaskPriority.high, "2024-12-20", 0, ecommerce, sarah),
        ("Fix payment gateway bug", "Critical issue affecting checkout process",
         TaskStatus.in_progress, TaskPriority.urgent, "2024-12-18", 60, ecommerce, john),
        ("Database optimization", "Optimize queries for better performance",
         TaskStatus.review, TaskPriority.medium, "2024-12-22", 90, ecommerce, sarah),
        ("User interface mockups", "Create high-fidelity designs for dashboard",
         TaskStatus.done, TaskPriority.low, "2024-12-15", 100, mobile, sarah),
    ]
    for title, description, status, priority, due, progress, project, assignee in demo_tasks:
        store.tasks.add(Task(
            title=title,
            description=description,
            status=status,
            priority=priority,
            due_date=_date(due),
            progress=progress,
            project_id=project.id,
            assignee_id=assignee.id,
            created_by=john.id,
        ))

    logger.info("Seeded demo data: %s", store.stats())
