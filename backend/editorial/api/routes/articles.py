"""
Article Routes

Endpoints for article workflow records:
- Create, list, get
- Legal transitions for the acting user
- Apply a transition (single and bulk)
- Audit history
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..deps import (
    get_current_actor_dep, get_correlation_id_dep, get_engine_dep,
    get_permission_guard_dep, get_article_service_dep
)
from ...domain.enums import ArticleStatus
from ...domain.errors import ERROR_BY_KIND
from ...domain.models import ActorContext, ArticleWorkflowState, AuditEvent, TransitionResult
from ...engine.engine import WorkflowEngine
from ...engine.permission_guard import PermissionGuard, highest_role
from ...services.article_service import ArticleService
from ...utils.logger import get_logger
from .schemas import (
    CreateArticleRequest, ArticleListResponse, TransitionRequest,
    BulkTransitionRequest, BulkTransitionResponse, TransitionOptionsResponse
)

logger = get_logger(__name__)
router = APIRouter()


@router.post("", response_model=ArticleWorkflowState, status_code=201)
async def create_article(
    request: CreateArticleRequest,
    actor: ActorContext = Depends(get_current_actor_dep),
    correlation_id: str = Depends(get_correlation_id_dep),
    service: ArticleService = Depends(get_article_service_dep)
):
    """Register an article with the workflow."""
    return service.create_article(
        actor=actor,
        title=request.title,
        author_id=request.author_id,
        initial_status=request.initial_status,
        article_id=request.article_id
    )


@router.get("", response_model=ArticleListResponse)
async def list_articles(
    status: Optional[ArticleStatus] = Query(None, description="Exact status"),
    view: Optional[str] = Query(None, description="Named workflow filter, e.g. on_hold"),
    author_id: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    actor: ActorContext = Depends(get_current_actor_dep),
    service: ArticleService = Depends(get_article_service_dep)
):
    """List articles, newest activity first."""
    items = service.list_articles(
        status=status, view=view, author_id=author_id, skip=skip, limit=limit
    )
    return ArticleListResponse(items=items, skip=skip, limit=limit, count=len(items))


# Must be registered before /{article_id}/transitions
@router.post("/bulk/transitions", response_model=BulkTransitionResponse)
async def bulk_transition(
    request: BulkTransitionRequest,
    actor: ActorContext = Depends(get_current_actor_dep),
    correlation_id: str = Depends(get_correlation_id_dep),
    engine: WorkflowEngine = Depends(get_engine_dep),
    guard: PermissionGuard = Depends(get_permission_guard_dep)
):
    """
    Apply one action to many articles.

    Always 200 once the actor is allowed the action; each item carries its own
    success or error.
    """
    guard.require(actor, request.action)

    result = engine.bulk_apply(
        request.action,
        request.items,
        actor_role=highest_role(actor.roles).value,
        inputs=request.inputs,
        actor_id=actor.actor_id
    )
    return BulkTransitionResponse(
        action=result.action,
        succeeded=len(result.succeeded),
        failed=len(result.failed),
        results=result.results
    )


@router.get("/{article_id}", response_model=ArticleWorkflowState)
async def get_article(
    article_id: str,
    actor: ActorContext = Depends(get_current_actor_dep),
    service: ArticleService = Depends(get_article_service_dep)
):
    return service.get_article(article_id)


@router.get("/{article_id}/transitions", response_model=TransitionOptionsResponse)
async def get_transitions(
    article_id: str,
    actor: ActorContext = Depends(get_current_actor_dep),
    service: ArticleService = Depends(get_article_service_dep),
    guard: PermissionGuard = Depends(get_permission_guard_dep)
):
    """Legal actions from the article's status that the actor's roles allow."""
    article = service.get_article(article_id)
    legal = WorkflowEngine.list_transitions_for(article.status)
    allowed = legal & guard.allowed_actions(actor.roles)
    return TransitionOptionsResponse(
        article_id=article_id,
        status=article.status,
        actions=sorted(allowed, key=lambda a: a.value)
    )


@router.post("/{article_id}/transitions", response_model=TransitionResult)
async def apply_transition(
    article_id: str,
    request: TransitionRequest,
    actor: ActorContext = Depends(get_current_actor_dep),
    correlation_id: str = Depends(get_correlation_id_dep),
    engine: WorkflowEngine = Depends(get_engine_dep),
    guard: PermissionGuard = Depends(get_permission_guard_dep)
):
    """
    Apply one action to one article.

    `expected_status` must match the stored status; otherwise 409
    CONCURRENT_MODIFICATION and nothing is written.
    """
    guard.require(actor, request.action)

    result = engine.apply_transition(
        article_id,
        request.action,
        highest_role(actor.roles).value,
        request.inputs,
        request.expected_status,
        actor_id=actor.actor_id
    )
    if not result.success:
        error = result.error
        raise ERROR_BY_KIND[error.kind](error.message, details=error.details)
    return result


@router.get("/{article_id}/history", response_model=List[AuditEvent])
async def get_history(
    article_id: str,
    actor: ActorContext = Depends(get_current_actor_dep),
    service: ArticleService = Depends(get_article_service_dep)
):
    """Audit trail, oldest first."""
    return service.get_history(article_id)
