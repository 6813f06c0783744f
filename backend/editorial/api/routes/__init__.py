"""API Routes module"""
from fastapi import APIRouter

from .articles import router as articles_router
from .workflow import router as workflow_router
from .dashboard import router as dashboard_router

# Main API router
api_router = APIRouter()

api_router.include_router(articles_router, prefix="/articles", tags=["Articles"])
api_router.include_router(workflow_router, prefix="/workflow", tags=["Workflow"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])

__all__ = ["api_router"]
