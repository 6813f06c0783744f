"""Article State Machine - Pure transition evaluation (no I/O)"""
from datetime import datetime
from typing import Any, Dict, Optional

from ..domain.enums import ArticleStatus, WorkflowAction, TransitionInput
from ..domain.errors import InvalidTransitionError, MissingInputError, InvalidInputError
from ..domain.models import ArticleWorkflowState, TransitionInputs
from ..utils.time import ensure_utc
from .transition_table import TransitionRule, get_rule, resolve_target


class ArticleStateMachine:
    """
    Compute the next workflow state of an article

    Given the current state, an action, its inputs and the current time,
    `evaluate` either returns the new state or raises:
    - InvalidTransitionError: action not legal from the current status
    - MissingInputError: a required input is absent or blank
    - InvalidInputError: an input is present but unusable (past schedule time)

    The current state is never mutated.
    """

    def evaluate(
        self,
        current: ArticleWorkflowState,
        action: WorkflowAction,
        inputs: Optional[TransitionInputs],
        now: datetime
    ) -> ArticleWorkflowState:
        inputs = inputs or TransitionInputs()
        rule = get_rule(action)

        if not rule.allows(current.status):
            raise InvalidTransitionError(
                f"Cannot {action.value} an article in status {current.status.value}",
                details={
                    "article_id": current.article_id,
                    "action": action.value,
                    "current_status": current.status.value,
                }
            )

        values = self._validate_inputs(rule, inputs, now)
        updates: Dict[str, Any] = {"updated_at": now}

        if not rule.changes_status:
            field = "featured" if action == WorkflowAction.SET_FEATURED else "trending"
            updates[field] = values[TransitionInput.FLAG]
            return current.model_copy(update=updates)

        target = resolve_target(rule, current.status, current.held_from)
        updates["status"] = target
        updates.update(self._side_effects(current, action, values, now))

        # scheduled_at and held_from only live in their own status
        if target != ArticleStatus.SCHEDULED:
            updates["scheduled_at"] = None
        if target != ArticleStatus.ON_HOLD:
            updates["held_from"] = None

        return current.model_copy(update=updates)

    def _side_effects(
        self,
        current: ArticleWorkflowState,
        action: WorkflowAction,
        values: Dict[TransitionInput, Any],
        now: datetime
    ) -> Dict[str, Any]:
        """Field writes an action performs besides the status change"""
        if action == WorkflowAction.REJECT:
            return {"feedback": values[TransitionInput.REASON]}
        if action in (WorkflowAction.REQUEST_REVISION, WorkflowAction.RETURN_TO_WRITER):
            return {"feedback": values[TransitionInput.FEEDBACK]}
        if action == WorkflowAction.SCHEDULE:
            return {"scheduled_at": values[TransitionInput.SCHEDULED_AT]}
        if action == WorkflowAction.PUBLISH:
            return {"published_at": current.published_at or now}
        if action == WorkflowAction.UNPUBLISH:
            return {"published_at": None}
        if action == WorkflowAction.RETRACT:
            return {"feedback": values[TransitionInput.REASON], "published_at": None}
        if action == WorkflowAction.ASSIGN:
            return {"author_id": values[TransitionInput.ASSIGNEE_ID]}
        if action == WorkflowAction.UNASSIGN:
            return {"author_id": None}
        if action == WorkflowAction.PUT_ON_HOLD:
            return {"held_from": current.status, "feedback": values[TransitionInput.REASON]}
        return {}

    def _validate_inputs(
        self,
        rule: TransitionRule,
        inputs: TransitionInputs,
        now: datetime
    ) -> Dict[TransitionInput, Any]:
        values: Dict[TransitionInput, Any] = {}
        for required in rule.required_inputs:
            raw = getattr(inputs, required.value)
            if required == TransitionInput.SCHEDULED_AT:
                values[required] = self._validate_schedule(rule, raw, now)
            elif required == TransitionInput.FLAG:
                if raw is None:
                    raise self._missing(rule, required)
                values[required] = raw
            else:
                text = (raw or "").strip()
                if not text:
                    raise self._missing(rule, required)
                values[required] = text
        return values

    def _validate_schedule(
        self,
        rule: TransitionRule,
        scheduled_at: Optional[datetime],
        now: datetime
    ) -> datetime:
        if scheduled_at is None:
            raise self._missing(rule, TransitionInput.SCHEDULED_AT)
        scheduled_at = ensure_utc(scheduled_at)
        if scheduled_at <= ensure_utc(now):
            raise InvalidInputError(
                "Scheduled publish time must be in the future",
                details={
                    "input": TransitionInput.SCHEDULED_AT.value,
                    "scheduled_at": scheduled_at.isoformat(),
                    "now": ensure_utc(now).isoformat(),
                }
            )
        return scheduled_at

    @staticmethod
    def _missing(rule: TransitionRule, required: TransitionInput) -> MissingInputError:
        return MissingInputError(
            f"{rule.action.value} requires a non-empty '{required.value}'",
            details={"action": rule.action.value, "input": required.value}
        )
