"""Transition Table - The fixed set of legal article status transitions

Each rule names the action, the statuses it may start from, where it leads
and which inputs it requires. A rule never lists its own target among its
source statuses, so re-applying a status transition is always illegal.
"""
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple

from ..domain.enums import ArticleStatus as S, WorkflowAction as A, TransitionInput as I
from .classification import (
    REVIEWABLE, PUBLISHABLE, SCHEDULABLE, TERMINAL, REVIEW_DESKS, is_in_workflow
)


ALL_STATUSES: FrozenSet[S] = frozenset(S)
NON_TERMINAL: FrozenSet[S] = ALL_STATUSES - TERMINAL


@dataclass(frozen=True)
class TransitionRule:
    """
    One row of the transition table

    `to_status` is None for flag actions (status unchanged) and for actions
    whose target depends on the article (ADVANCE_STAGE, RESUME).
    """
    action: A
    from_statuses: FrozenSet[S]
    to_status: Optional[S] = None
    required_inputs: Tuple[I, ...] = ()
    changes_status: bool = True

    def allows(self, status: S) -> bool:
        return status in self.from_statuses


def _rule(action: A, from_statuses, to_status: Optional[S] = None, *inputs: I) -> TransitionRule:
    sources = frozenset(from_statuses)
    if to_status is not None:
        sources = sources - {to_status}
    return TransitionRule(action, sources, to_status, tuple(inputs))


def _flag_rule(action: A) -> TransitionRule:
    return TransitionRule(action, ALL_STATUSES, None, (I.FLAG,), changes_status=False)


TRANSITIONS: Dict[A, TransitionRule] = {
    rule.action: rule for rule in (
        _rule(A.SUBMIT_FOR_REVIEW, {S.DRAFT, S.IN_PROGRESS, S.NEEDS_REVISION}, S.READY_FOR_REVIEW),
        _rule(A.BEGIN_REVIEW, {S.READY_FOR_REVIEW}, S.UNDER_REVIEW),
        _rule(A.APPROVE, REVIEWABLE, S.APPROVED),
        _rule(A.REJECT, NON_TERMINAL, S.REJECTED, I.REASON),
        _rule(A.REQUEST_REVISION, REVIEWABLE, S.NEEDS_REVISION, I.FEEDBACK),
        _rule(A.RETURN_TO_WRITER, NON_TERMINAL, S.RETURNED_TO_WRITER, I.FEEDBACK),
        _rule(A.SCHEDULE, SCHEDULABLE, S.SCHEDULED, I.SCHEDULED_AT),
        _rule(A.PUBLISH, PUBLISHABLE, S.PUBLISHED),
        _rule(A.UNPUBLISH, {S.PUBLISHED}, S.UNPUBLISHED),
        _rule(A.ARCHIVE, ALL_STATUSES, S.ARCHIVED),
        _flag_rule(A.SET_FEATURED),
        _flag_rule(A.SET_TRENDING),
        _rule(A.START_WORK, {S.DRAFT, S.ASSIGNED, S.UNASSIGNED, S.RETURNED_TO_WRITER}, S.IN_PROGRESS),
        _rule(
            A.ASSIGN,
            {S.DRAFT, S.UNASSIGNED, S.IN_PROGRESS, S.RETURNED_TO_WRITER},
            S.ASSIGNED,
            I.ASSIGNEE_ID,
        ),
        _rule(A.UNASSIGN, {S.ASSIGNED}, S.UNASSIGNED),
        _rule(A.ADVANCE_STAGE, REVIEW_DESKS[:-1]),
        # SCHEDULED cannot be held: resuming would need the cleared publish time
        _rule(
            A.PUT_ON_HOLD,
            {s for s in S if is_in_workflow(s)} - {S.SCHEDULED},
            S.ON_HOLD,
            I.REASON,
        ),
        _rule(A.RESUME, {S.ON_HOLD}),
        _rule(A.RETRACT, {S.PUBLISHED}, S.RETRACTED, I.REASON),
        _rule(A.EXPIRE, {S.PUBLISHED}, S.EXPIRED),
        _rule(A.RESTORE, {S.ARCHIVED}, S.IN_PROGRESS),
    )
}

# Legacy records held without a remembered status resume here
DEFAULT_RESUME_STATUS = S.IN_PROGRESS


def get_rule(action: A) -> TransitionRule:
    return TRANSITIONS[action]


def list_transitions_for(status: S) -> FrozenSet[A]:
    """All actions legal from the given status"""
    return frozenset(action for action, rule in TRANSITIONS.items() if rule.allows(status))


def next_desk(status: S) -> S:
    """The specialist desk after `status` in the review pipeline"""
    return REVIEW_DESKS[REVIEW_DESKS.index(status) + 1]


def resolve_target(rule: TransitionRule, current: S, held_from: Optional[S] = None) -> S:
    """Target status of a status-changing rule applied to `current`"""
    if rule.to_status is not None:
        return rule.to_status
    if rule.action == A.ADVANCE_STAGE:
        return next_desk(current)
    if rule.action == A.RESUME:
        return held_from or DEFAULT_RESUME_STATUS
    raise ValueError(f"Rule {rule.action.value} has no resolvable target")
