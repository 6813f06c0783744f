"""Dashboard Service - Role projections over the workflow"""
from typing import Dict, FrozenSet, List, Optional

from ..domain.enums import ArticleStatus as S, DashboardView
from ..domain.errors import ValidationError
from ..domain.models import (
    ActorContext, ArticleWorkflowState, DashboardSummary, StatusCount
)
from ..engine.classification import (
    PENDING_REVIEW, PUBLISHABLE, NEEDS_ATTENTION, is_in_workflow, is_pending_review,
    needs_attention
)
from ..repositories.article_repo import ArticleRepository


# Statuses each role dashboard lists; None means "the actor's own articles"
VIEW_STATUSES: Dict[DashboardView, Optional[FrozenSet[S]]] = {
    DashboardView.ADMIN: frozenset(s for s in S if is_in_workflow(s)),
    DashboardView.PUBLISHER: PENDING_REVIEW | PUBLISHABLE | NEEDS_ATTENTION,
    DashboardView.EDITOR: frozenset({
        S.READY_FOR_REVIEW, S.UNDER_REVIEW, S.PENDING_APPROVAL,
        S.NEEDS_REVISION, S.IN_PROGRESS, S.RETURNED_TO_WRITER,
    }),
    DashboardView.AUTHOR: None,
}


class DashboardService:
    """Counts and listings for the role dashboards"""

    def __init__(self, article_repo: ArticleRepository):
        self.article_repo = article_repo

    def status_statistics(self) -> List[StatusCount]:
        """Count for every status, zero-filled"""
        counts = self.article_repo.count_by_status()
        return [
            StatusCount(status=status, display_name=status.display_name, count=counts.get(status, 0))
            for status in S
        ]

    def summary(self) -> DashboardSummary:
        counts = self.article_repo.count_by_status()
        return DashboardSummary(
            total=sum(counts.values()),
            published=counts.get(S.PUBLISHED, 0),
            pending_review=sum(n for s, n in counts.items() if is_pending_review(s)),
            needs_attention=sum(n for s, n in counts.items() if needs_attention(s)),
            in_workflow=sum(n for s, n in counts.items() if is_in_workflow(s)),
        )

    def view(
        self,
        view: str,
        actor: ActorContext,
        skip: int = 0,
        limit: int = 50
    ) -> List[ArticleWorkflowState]:
        """Articles relevant to a role dashboard"""
        try:
            dashboard = DashboardView(view.lower())
        except ValueError:
            raise ValidationError(
                f"Unknown dashboard: {view}",
                details={"dashboard": view, "allowed": [v.value for v in DashboardView]}
            )

        statuses = VIEW_STATUSES[dashboard]
        if statuses is None:
            return self.article_repo.list_articles(author_id=actor.actor_id, skip=skip, limit=limit)
        return self.article_repo.list_articles(statuses=statuses, skip=skip, limit=limit)
