"""API Dependencies - Common dependencies for routes"""
from typing import Optional
from fastapi import Header

from ..domain.errors import AuthenticationError
from ..domain.models import ActorContext
from ..engine.engine import WorkflowEngine
from ..engine.permission_guard import PermissionGuard, normalize_roles
from ..services import registry
from ..services.article_service import ArticleService
from ..services.dashboard_service import DashboardService
from ..utils.logger import set_correlation_id
from ..utils.idgen import generate_correlation_id


async def get_correlation_id_dep(
    x_correlation_id: Optional[str] = Header(None, alias="X-Correlation-Id")
) -> str:
    """Use the client's X-Correlation-Id, or generate a new one"""
    correlation_id = x_correlation_id or generate_correlation_id()
    set_correlation_id(correlation_id)
    return correlation_id


async def get_current_actor_dep(
    x_actor_id: Optional[str] = Header(None, alias="X-Actor-Id"),
    x_actor_roles: Optional[str] = Header(None, alias="X-Actor-Roles")
) -> ActorContext:
    """
    Acting user from the identity headers set by the upstream gateway

    Roles are comma separated; 'ROLE_' prefixes are accepted and stripped.

    Raises:
        AuthenticationError: 401 if X-Actor-Id is missing
    """
    if not x_actor_id or not x_actor_id.strip():
        raise AuthenticationError("X-Actor-Id header is missing")

    raw_roles = [r for r in (x_actor_roles or "").split(",") if r.strip()]
    return ActorContext(
        actor_id=x_actor_id.strip(),
        roles=[role.value for role in normalize_roles(raw_roles)],
    )


def get_engine_dep() -> WorkflowEngine:
    return registry.get_workflow_engine()


def get_permission_guard_dep() -> PermissionGuard:
    return registry.get_permission_guard()


def get_article_service_dep() -> ArticleService:
    return registry.get_article_service()


def get_dashboard_service_dep() -> DashboardService:
    return registry.get_dashboard_service()


__all__ = [
    "get_correlation_id_dep",
    "get_current_actor_dep",
    "get_engine_dep",
    "get_permission_guard_dep",
    "get_article_service_dep",
    "get_dashboard_service_dep",
]
