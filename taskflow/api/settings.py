"""User settings API router."""

from typing import Optional

from fastapi import APIRouter, Depends

from taskflow.db.memory import EntityStore
from taskflow.db.session import get_store
from taskflow.schemas.schemas import SettingsUpdate, SettingsOut
from taskflow.services.settings_service import settings_service
from taskflow.core.security import get_current_user
from taskflow.models import User

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=Optional[SettingsOut])
async def get_settings(
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    """The caller's settings, or null if they never saved any."""
    return settings_service.get(store, user.id)


@router.put("", response_model=SettingsOut)
async def update_settings(
    body: SettingsUpdate,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    return settings_service.update(store, user.id, body)
