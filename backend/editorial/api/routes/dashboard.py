"""
Dashboard Routes

Counts and role-specific listings for the admin, publisher, editor and
author dashboards.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from ..deps import get_current_actor_dep, get_dashboard_service_dep
from ...domain.models import ActorContext, ArticleWorkflowState, DashboardSummary, StatusCount
from ...services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/statistics", response_model=List[StatusCount])
async def get_statistics(
    actor: ActorContext = Depends(get_current_actor_dep),
    service: DashboardService = Depends(get_dashboard_service_dep)
):
    """Article count for every status, including zeros."""
    return service.status_statistics()


@router.get("/summary", response_model=DashboardSummary)
async def get_summary(
    actor: ActorContext = Depends(get_current_actor_dep),
    service: DashboardService = Depends(get_dashboard_service_dep)
):
    return service.summary()


@router.get("/{role}", response_model=List[ArticleWorkflowState])
async def get_role_dashboard(
    role: str,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    actor: ActorContext = Depends(get_current_actor_dep),
    service: DashboardService = Depends(get_dashboard_service_dep)
):
    """Articles for one role view; the author view lists the actor's own articles."""
    return service.view(role, actor, skip=skip, limit=limit)
