"""Admin API router."""

from fastapi import APIRouter, Depends

from taskflow.db.memory import EntityStore
from taskflow.db.session import get_store
from taskflow.core.security import require_scrum_master
from taskflow.models import User

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats")
async def store_stats(
    store: EntityStore = Depends(get_store),
    user: User = Depends(require_scrum_master),
):
    """Row counts per collection (scrum masters only)."""
    return store.stats()
