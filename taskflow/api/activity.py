"""Activity log API router."""

from typing import List

from fastapi import APIRouter, Depends

from taskflow.db.memory import EntityStore
from taskflow.db.session import get_store
from taskflow.schemas.schemas import ActivityLogOut
from taskflow.services.activity_service import activity_service
from taskflow.core.security import get_current_user
from taskflow.models import User

router = APIRouter(prefix="/activity", tags=["activity"])


@router.get("", response_model=List[ActivityLogOut])
async def list_activity(
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    """The caller's own activity, oldest first."""
    return activity_service.get_by_user(store, user.id)
