"""Users API router."""

from typing import List

from fastapi import APIRouter, Depends

from taskflow.db.memory import EntityStore
from taskflow.db.session import get_store
from taskflow.schemas.schemas import UserOut, UserUpdate
from taskflow.services.auth_service import auth_service
from taskflow.core.security import get_current_user, can_manage_user
from taskflow.core.exceptions import AuthorizationError, ResourceNotFoundError
from taskflow.models import User

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserOut])
async def list_users(
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    """List the whole team."""
    return auth_service.list_users(store)


@router.put("/{user_id}", response_model=UserOut)
async def update_user(
    user_id: str,
    body: UserUpdate,
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    """Update a profile. Only the user themself or a scrum master may do this."""
    if not can_manage_user(user, user_id):
        raise AuthorizationError("Not authorized to update this user")
    updated = auth_service.update_user(store, user_id, body)
    if updated is None:
        raise ResourceNotFoundError("User not found")
    return updated
