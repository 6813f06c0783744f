"""Domain Models - Pydantic schemas for workflow entities"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from .enums import (
    ArticleStatus, WorkflowAction, WorkflowErrorKind, AuditEventType
)
from .errors import DomainError


# ============================================================================
# Identity
# ============================================================================

class ActorContext(BaseModel):
    """Acting user as supplied by the caller"""
    model_config = ConfigDict(extra="forbid")

    actor_id: str = Field(..., description="Opaque user identifier")
    roles: List[str] = Field(default_factory=list, description="Normalized roles")
    display_name: Optional[str] = None


# ============================================================================
# Article Workflow State
# ============================================================================

class ArticleWorkflowState(BaseModel):
    """
    Workflow-relevant slice of an article

    The content payload lives elsewhere; the engine only reads and writes
    these fields.
    """
    model_config = ConfigDict(extra="forbid")

    article_id: str = Field(..., description="Stable article identifier")
    status: ArticleStatus
    title: Optional[str] = None
    author_id: Optional[str] = Field(None, description="Current owner of the article")
    assigned_role: Optional[str] = Field(None, description="Role currently owning the article")
    feedback: Optional[str] = Field(None, description="Last reviewer/editor note")
    scheduled_at: Optional[datetime] = Field(None, description="Set iff status is SCHEDULED")
    published_at: Optional[datetime] = None
    held_from: Optional[ArticleStatus] = Field(None, description="Status to restore on resume")
    featured: bool = False
    trending: bool = False
    created_at: datetime
    updated_at: datetime
    version: int = Field(default=1, description="Optimistic concurrency version")


class TransitionInputs(BaseModel):
    """Optional inputs for a transition; which are required depends on the action"""
    model_config = ConfigDict(extra="forbid")

    reason: Optional[str] = None
    feedback: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    flag: Optional[bool] = None
    assignee_id: Optional[str] = None


class StateClassification(BaseModel):
    """Answers every dashboard needs about a status"""
    in_workflow: bool
    reviewable: bool
    publishable: bool
    schedulable: bool


# ============================================================================
# Results
# ============================================================================

class WorkflowError(BaseModel):
    """Machine-readable error value returned by the engine"""
    kind: WorkflowErrorKind
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: DomainError) -> "WorkflowError":
        return cls(
            kind=exc.kind,
            code=exc.error_code,
            message=exc.message,
            details=exc.details,
        )


class TransitionResult(BaseModel):
    """Outcome of one apply_transition call"""
    article_id: str
    action: WorkflowAction
    success: bool
    state: Optional[ArticleWorkflowState] = None
    error: Optional[WorkflowError] = None

    @classmethod
    def ok(cls, action: WorkflowAction, state: ArticleWorkflowState) -> "TransitionResult":
        return cls(article_id=state.article_id, action=action, success=True, state=state)

    @classmethod
    def failed(cls, article_id: str, action: WorkflowAction, exc: DomainError) -> "TransitionResult":
        return cls(
            article_id=article_id,
            action=action,
            success=False,
            error=WorkflowError.from_exception(exc),
        )


class BulkItem(BaseModel):
    """One member of a bulk request"""
    article_id: str
    expected_status: ArticleStatus


class BulkTransitionResult(BaseModel):
    """Per-item outcome of a bulk operation (no atomicity across items)"""
    action: WorkflowAction
    results: List[TransitionResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> List[TransitionResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> List[TransitionResult]:
        return [r for r in self.results if not r.success]


# ============================================================================
# Audit
# ============================================================================

class AuditEvent(BaseModel):
    """Audit event (append-only)"""
    model_config = ConfigDict(extra="forbid")

    audit_event_id: str
    article_id: str
    event_type: AuditEventType
    action: Optional[WorkflowAction] = None
    from_status: Optional[ArticleStatus] = None
    to_status: Optional[ArticleStatus] = None
    actor_id: Optional[str] = None
    actor_role: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime
    correlation_id: Optional[str] = None


# ============================================================================
# Dashboard
# ============================================================================

class StatusCount(BaseModel):
    """Article count for one status"""
    status: ArticleStatus
    display_name: str
    count: int


class DashboardSummary(BaseModel):
    """Headline numbers shown on the dashboards"""
    total: int
    published: int
    pending_review: int
    needs_attention: int
    in_workflow: int
