"""
Workflow Engine - Article editorial workflow

The engine applies named actions to stored articles:

1. Load the current record (NotFound if unknown)
2. Check the caller's expected status against the stored one
3. Evaluate the transition with the pure ArticleStateMachine
4. Persist with a compare-and-swap on (status, version)
5. Append an audit event

Workflow failures are returned as TransitionResult values, never raised, so
that bulk callers can carry on after a per-item failure. Role permissions are
the caller's concern; `actor_role` is only recorded in the audit trail.
"""
from datetime import datetime
from typing import FrozenSet, Iterable, Optional

from ..domain.enums import ArticleStatus, WorkflowAction
from ..domain.errors import DomainError, ConcurrentModificationError
from ..domain.models import (
    ArticleWorkflowState, TransitionInputs, TransitionResult,
    BulkItem, BulkTransitionResult, StateClassification
)
from ..repositories.article_repo import ArticleRepository
from ..utils.time import Clock, utc_now
from ..utils.logger import get_logger
from .audit_writer import AuditWriter
from .classification import classify
from .state_machine import ArticleStateMachine
from .transition_table import list_transitions_for

logger = get_logger(__name__)


class WorkflowEngine:
    """
    Central entry point for article status changes

    Responsibilities:
    - Enforce the transition table and required inputs
    - Enforce optimistic concurrency against the store
    - Report every outcome as a value (single and bulk)
    - Write the audit trail
    """

    def __init__(
        self,
        article_repo: ArticleRepository,
        audit_writer: Optional[AuditWriter] = None,
        state_machine: Optional[ArticleStateMachine] = None,
        clock: Clock = utc_now
    ):
        self.article_repo = article_repo
        self.audit_writer = audit_writer
        self.state_machine = state_machine or ArticleStateMachine()
        self.clock = clock

    # =========================================================================
    # Queries
    # =========================================================================

    @staticmethod
    def list_transitions_for(status: ArticleStatus) -> FrozenSet[WorkflowAction]:
        return list_transitions_for(status)

    @staticmethod
    def classify(status: ArticleStatus) -> StateClassification:
        return classify(status)

    # =========================================================================
    # Transitions
    # =========================================================================

    def apply_transition(
        self,
        article_id: str,
        action: WorkflowAction,
        actor_role: Optional[str],
        inputs: Optional[TransitionInputs],
        expected_current_state: ArticleStatus,
        actor_id: Optional[str] = None
    ) -> TransitionResult:
        """
        Apply one action to one article

        Returns:
            TransitionResult with the new state, or with a WorkflowError of kind
            NOT_FOUND, CONCURRENT_MODIFICATION, INVALID_TRANSITION,
            MISSING_INPUT or INVALID_INPUT
        """
        try:
            state = self._transition(
                article_id, action, actor_role, inputs, expected_current_state, actor_id
            )
        except DomainError as e:
            logger.warning(
                f"Transition {action.value} rejected for {article_id}: {e.message}",
                extra={
                    "article_id": article_id,
                    "action": action.value,
                    "actor_role": actor_role,
                    "error_code": e.error_code,
                }
            )
            return TransitionResult.failed(article_id, action, e)

        return TransitionResult.ok(action, state)

    def _transition(
        self,
        article_id: str,
        action: WorkflowAction,
        actor_role: Optional[str],
        inputs: Optional[TransitionInputs],
        expected_current_state: ArticleStatus,
        actor_id: Optional[str]
    ) -> ArticleWorkflowState:
        current = self.article_repo.get_or_raise(article_id)

        if current.status != expected_current_state:
            raise ConcurrentModificationError(
                f"Article {article_id} is {current.status.value}, "
                f"not {expected_current_state.value}",
                details={
                    "article_id": article_id,
                    "expected_status": expected_current_state.value,
                    "current_status": current.status.value,
                }
            )

        now: datetime = self.clock()
        proposed = self.state_machine.evaluate(current, action, inputs, now)

        written = self.article_repo.compare_and_set(
            article_id,
            expected_status=current.status,
            expected_version=current.version,
            new_state=proposed
        )

        logger.info(
            f"Article {article_id}: {current.status.value} -> {written.status.value} ({action.value})",
            extra={
                "article_id": article_id,
                "action": action.value,
                "from_status": current.status.value,
                "to_status": written.status.value,
                "actor_role": actor_role,
            }
        )

        if self.audit_writer is not None:
            try:
                self.audit_writer.write_transition(
                    action, before=current, after=written, actor_role=actor_role, actor_id=actor_id
                )
            except Exception as e:
                # The transition is committed; report it even if the audit store failed
                logger.error(
                    f"Failed to write audit event for {article_id} ({action.value}): {e}",
                    exc_info=True,
                    extra={"article_id": article_id, "action": action.value}
                )

        return written

    def bulk_apply(
        self,
        action: WorkflowAction,
        items: Iterable[BulkItem],
        actor_role: Optional[str],
        inputs: Optional[TransitionInputs] = None,
        actor_id: Optional[str] = None
    ) -> BulkTransitionResult:
        """
        Apply the same action to each item in turn

        No atomicity across items: each item succeeds or fails on its own and
        is reported individually.
        """
        result = BulkTransitionResult(action=action)
        for item in items:
            result.results.append(
                self.apply_transition(
                    item.article_id, action, actor_role, inputs, item.expected_status,
                    actor_id=actor_id
                )
            )

        logger.info(
            f"Bulk {action.value}: {len(result.succeeded)} succeeded, {len(result.failed)} failed",
            extra={"action": action.value, "actor_role": actor_role, "count": len(result.results)}
        )
        return result

    # =========================================================================
    # Named operations
    # =========================================================================

    def submit_for_review(self, article_id: str, expected: ArticleStatus,
                          actor_role: Optional[str] = None) -> TransitionResult:
        return self.apply_transition(
            article_id, WorkflowAction.SUBMIT_FOR_REVIEW, actor_role, None, expected
        )

    def begin_review(self, article_id: str, expected: ArticleStatus,
                     actor_role: Optional[str] = None) -> TransitionResult:
        return self.apply_transition(
            article_id, WorkflowAction.BEGIN_REVIEW, actor_role, None, expected
        )

    def approve(self, article_id: str, expected: ArticleStatus,
                actor_role: Optional[str] = None) -> TransitionResult:
        return self.apply_transition(
            article_id, WorkflowAction.APPROVE, actor_role, None, expected
        )

    def reject(self, article_id: str, reason: Optional[str], expected: ArticleStatus,
               actor_role: Optional[str] = None) -> TransitionResult:
        return self.apply_transition(
            article_id, WorkflowAction.REJECT, actor_role,
            TransitionInputs(reason=reason), expected
        )

    def request_revision(self, article_id: str, feedback: Optional[str], expected: ArticleStatus,
                         actor_role: Optional[str] = None) -> TransitionResult:
        return self.apply_transition(
            article_id, WorkflowAction.REQUEST_REVISION, actor_role,
            TransitionInputs(feedback=feedback), expected
        )

    def return_to_writer(self, article_id: str, feedback: Optional[str], expected: ArticleStatus,
                         actor_role: Optional[str] = None) -> TransitionResult:
        return self.apply_transition(
            article_id, WorkflowAction.RETURN_TO_WRITER, actor_role,
            TransitionInputs(feedback=feedback), expected
        )

    def schedule(self, article_id: str, scheduled_at: Optional[datetime], expected: ArticleStatus,
                 actor_role: Optional[str] = None) -> TransitionResult:
        return self.apply_transition(
            article_id, WorkflowAction.SCHEDULE, actor_role,
            TransitionInputs(scheduled_at=scheduled_at), expected
        )

    def publish(self, article_id: str, expected: ArticleStatus,
                actor_role: Optional[str] = None) -> TransitionResult:
        return self.apply_transition(
            article_id, WorkflowAction.PUBLISH, actor_role, None, expected
        )

    def unpublish(self, article_id: str, expected: ArticleStatus,
                  actor_role: Optional[str] = None) -> TransitionResult:
        return self.apply_transition(
            article_id, WorkflowAction.UNPUBLISH, actor_role, None, expected
        )

    def archive(self, article_id: str, expected: ArticleStatus,
                actor_role: Optional[str] = None) -> TransitionResult:
        return self.apply_transition(
            article_id, WorkflowAction.ARCHIVE, actor_role, None, expected
        )

    def set_featured(self, article_id: str, featured: bool, expected: ArticleStatus,
                     actor_role: Optional[str] = None) -> TransitionResult:
        return self.apply_transition(
            article_id, WorkflowAction.SET_FEATURED, actor_role,
            TransitionInputs(flag=featured), expected
        )

    def set_trending(self, article_id: str, trending: bool, expected: ArticleStatus,
                     actor_role: Optional[str] = None) -> TransitionResult:
        return self.apply_transition(
            article_id, WorkflowAction.SET_TRENDING, actor_role,
            TransitionInputs(flag=trending), expected
        )
