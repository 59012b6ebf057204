"""Analytics API router."""

from fastapi import APIRouter, Depends

from taskflow.db.memory import EntityStore
from taskflow.db.session import get_store
from taskflow.schemas.schemas import TaskMetricsOut, InsightsOut
from taskflow.services.analytics_service import analytics_service
from taskflow.core.security import get_current_user
from taskflow.models import User

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/metrics", response_model=TaskMetricsOut)
async def get_metrics(
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    """Completed and overdue counts over the caller's assigned tasks."""
    return analytics_service.get_task_metrics(store, user.id)


@router.get("/insights", response_model=InsightsOut)
async def get_insights(
    store: EntityStore = Depends(get_store),
    user: User = Depends(get_current_user),
):
    return analytics_service.get_dashboard_insights(store, user.id)
