"""Entity store construction and dependency injection."""

from typing import Optional

from fastapi import Request

from taskflow.core.config import settings
from taskflow.db.memory import EntityStore


def init_store(seed: Optional[bool] = None) -> EntityStore:
    """Build the store once at startup, optionally loading the demo data."""
    store = EntityStore.create()
    if settings.SEED_DEMO_DATA if seed is None else seed:
        from taskflow.db.seeds.seed_demo_data import seed_demo_data
        seed_demo_data(store)
    return store


def get_store(request: Request) -> EntityStore:
    """FastAPI dependency that provides the application's store."""
    return request.app.state.store
