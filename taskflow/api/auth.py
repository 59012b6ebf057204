"""Auth API router — register, login, me."""

from fastapi import APIRouter, Depends

from taskflow.db.memory import EntityStore
from taskflow.db.session import get_store
from taskflow.schemas.schemas import LoginRequest, RegisterRequest, TokenResponse, UserOut
from taskflow.services.auth_service import auth_service
from taskflow.core.security import get_current_user
from taskflow.models import User

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse)
async def register(body: RegisterRequest, store: EntityStore = Depends(get_store)):
    """Create an account and return a bearer token for it."""
    token, user = auth_service.register(store, body)
    return TokenResponse(token=token, user=UserOut.model_validate(user))


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, store: EntityStore = Depends(get_store)):
    """Authenticate and return a bearer token."""
    token, user = auth_service.login(store, body.username, body.password)
    return TokenResponse(token=token, user=UserOut.model_validate(user))


@router.get("/me", response_model=UserOut)
async def get_me(user: User = Depends(get_current_user)):
    """Get current user profile."""
    return user
