"""Audit Writer - Append-only transition history"""
from typing import Any, Dict, Optional

from ..domain.models import AuditEvent, ArticleWorkflowState
from ..domain.enums import AuditEventType, WorkflowAction
from ..repositories.audit_repo import AuditRepository
from ..utils.idgen import generate_audit_event_id
from ..utils.logger import get_correlation_id
from ..utils.time import utc_now, format_iso


class AuditWriter:
    """
    Write audit events (append-only)

    Every successful transition and every article creation produces one event.
    """

    def __init__(self, repo: AuditRepository):
        self.repo = repo

    def write_event(
        self,
        article_id: str,
        event_type: AuditEventType,
        actor_id: Optional[str] = None,
        actor_role: Optional[str] = None,
        action: Optional[WorkflowAction] = None,
        before: Optional[ArticleWorkflowState] = None,
        after: Optional[ArticleWorkflowState] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> AuditEvent:
        """Write a single audit event"""
        event = AuditEvent(
            audit_event_id=generate_audit_event_id(),
            article_id=article_id,
            event_type=event_type,
            action=action,
            from_status=before.status if before else None,
            to_status=after.status if after else None,
            actor_id=actor_id,
            actor_role=actor_role,
            details=details or {},
            timestamp=after.updated_at if after else utc_now(),
            correlation_id=get_correlation_id()
        )
        return self.repo.create_event(event)

    def write_created(
        self,
        state: ArticleWorkflowState,
        actor_id: Optional[str],
        actor_role: Optional[str]
    ) -> AuditEvent:
        """Write article creation event"""
        return self.write_event(
            article_id=state.article_id,
            event_type=AuditEventType.ARTICLE_CREATED,
            actor_id=actor_id,
            actor_role=actor_role,
            after=state,
            details={"title": state.title}
        )

    def write_transition(
        self,
        action: WorkflowAction,
        before: ArticleWorkflowState,
        after: ArticleWorkflowState,
        actor_role: Optional[str],
        actor_id: Optional[str] = None
    ) -> AuditEvent:
        """Write a status change or flag change"""
        event_type = (
            AuditEventType.STATUS_CHANGED if before.status != after.status
            else AuditEventType.FLAG_CHANGED
        )
        details: Dict[str, Any] = {}
        if after.feedback != before.feedback and after.feedback:
            details["feedback"] = after.feedback
        if after.scheduled_at:
            details["scheduled_at"] = format_iso(after.scheduled_at)
        if event_type == AuditEventType.FLAG_CHANGED:
            details.update({"featured": after.featured, "trending": after.trending})

        return self.write_event(
            article_id=after.article_id,
            event_type=event_type,
            actor_id=actor_id,
            actor_role=actor_role,
            action=action,
            before=before,
            after=after,
            details=details
        )
