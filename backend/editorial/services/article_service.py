"""Article Service - Creation and lookup of article workflow records"""
from typing import List, Optional

from ..domain.enums import ArticleStatus
from ..domain.errors import ValidationError
from ..domain.models import ActorContext, ArticleWorkflowState, AuditEvent
from ..engine.audit_writer import AuditWriter
from ..engine.classification import filter_statuses
from ..engine.permission_guard import highest_role
from ..repositories.article_repo import ArticleRepository
from ..utils.idgen import generate_article_id
from ..utils.time import Clock, utc_now
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Articles enter the workflow in one of these
INITIAL_STATUSES = (ArticleStatus.DRAFT, ArticleStatus.IN_PROGRESS, ArticleStatus.ASSIGNED)


class ArticleService:
    """Service for article workflow records"""

    def __init__(
        self,
        article_repo: ArticleRepository,
        audit_writer: AuditWriter,
        clock: Clock = utc_now
    ):
        self.article_repo = article_repo
        self.audit_writer = audit_writer
        self.clock = clock

    def create_article(
        self,
        actor: ActorContext,
        title: Optional[str] = None,
        author_id: Optional[str] = None,
        initial_status: ArticleStatus = ArticleStatus.DRAFT,
        article_id: Optional[str] = None
    ) -> ArticleWorkflowState:
        """
        Register a new article with the workflow

        The caller decides whether the article starts as a DRAFT, or directly
        IN_PROGRESS / ASSIGNED when it is assigned on creation.
        """
        if initial_status not in INITIAL_STATUSES:
            raise ValidationError(
                f"Articles cannot be created in status {initial_status.value}",
                details={
                    "initial_status": initial_status.value,
                    "allowed": [s.value for s in INITIAL_STATUSES],
                }
            )

        now = self.clock()
        role = highest_role(actor.roles).value
        state = ArticleWorkflowState(
            article_id=article_id or generate_article_id(),
            status=initial_status,
            title=title,
            author_id=author_id or actor.actor_id,
            assigned_role=role,
            created_at=now,
            updated_at=now,
        )

        created = self.article_repo.create(state)
        self.audit_writer.write_created(created, actor_id=actor.actor_id, actor_role=role)
        return created

    def get_article(self, article_id: str) -> ArticleWorkflowState:
        return self.article_repo.get_or_raise(article_id)

    def list_articles(
        self,
        status: Optional[ArticleStatus] = None,
        view: Optional[str] = None,
        author_id: Optional[str] = None,
        skip: int = 0,
        limit: int = 50
    ) -> List[ArticleWorkflowState]:
        """List articles by exact status or by a named workflow filter"""
        if status is not None and view is not None:
            raise ValidationError("Filter by status or by view, not both")

        statuses = None
        if status is not None:
            statuses = [status]
        elif view is not None:
            statuses = filter_statuses(view)

        return self.article_repo.list_articles(
            statuses=statuses, author_id=author_id, skip=skip, limit=limit
        )

    def get_history(self, article_id: str) -> List[AuditEvent]:
        """Audit trail of one article, oldest first"""
        self.article_repo.get_or_raise(article_id)
        return self.audit_writer.repo.get_events_for_article(article_id)
