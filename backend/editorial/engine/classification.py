"""Status Classification - Shared predicates for every dashboard view"""
from typing import Dict, FrozenSet

from ..domain.enums import ArticleStatus as S
from ..domain.errors import ValidationError
from ..domain.models import StateClassification


OUT_OF_WORKFLOW: FrozenSet[S] = frozenset({
    S.DRAFT, S.PUBLISHED, S.REJECTED, S.ARCHIVED,
    S.RETRACTED, S.UNPUBLISHED, S.EXPIRED,
})

REVIEWABLE: FrozenSet[S] = frozenset({
    S.READY_FOR_REVIEW, S.UNDER_REVIEW, S.NEEDS_REVISION,
    S.FACT_CHECKING, S.LEGAL_REVIEW, S.COPY_EDIT, S.PROOFREADING,
})

PUBLISHABLE: FrozenSet[S] = frozenset({S.APPROVED, S.SCHEDULED})

SCHEDULABLE: FrozenSet[S] = frozenset({S.APPROVED})

# No further transition required (PUBLISHED and ARCHIVED can still re-enter)
TERMINAL: FrozenSet[S] = frozenset({
    S.PUBLISHED, S.ARCHIVED, S.REJECTED, S.RETRACTED, S.EXPIRED,
})

NEEDS_ATTENTION: FrozenSet[S] = frozenset({S.NEEDS_REVISION, S.RETURNED_TO_WRITER})

PENDING_REVIEW: FrozenSet[S] = frozenset({
    S.PENDING_APPROVAL, S.READY_FOR_REVIEW, S.UNDER_REVIEW,
})

# Specialist desks, in the order ADVANCE_STAGE walks them
REVIEW_DESKS = (S.UNDER_REVIEW, S.FACT_CHECKING, S.LEGAL_REVIEW, S.COPY_EDIT, S.PROOFREADING)


def is_in_workflow(status: S) -> bool:
    return status not in OUT_OF_WORKFLOW


def is_reviewable(status: S) -> bool:
    """States from which APPROVE and REQUEST_REVISION are legal"""
    return status in REVIEWABLE


def is_publishable(status: S) -> bool:
    return status in PUBLISHABLE


def is_schedulable(status: S) -> bool:
    return status in SCHEDULABLE


def is_terminal(status: S) -> bool:
    return status in TERMINAL


def needs_attention(status: S) -> bool:
    return status in NEEDS_ATTENTION


def is_pending_review(status: S) -> bool:
    return status in PENDING_REVIEW


def classify(status: S) -> StateClassification:
    """Classify a status for dashboard projections"""
    return StateClassification(
        in_workflow=is_in_workflow(status),
        reviewable=is_reviewable(status),
        publishable=is_publishable(status),
        schedulable=is_schedulable(status),
    )


# Named filters of the admin workflow view
WORKFLOW_FILTERS: Dict[str, FrozenSet[S]] = {
    "pending_approval": frozenset({S.PENDING_APPROVAL}),
    "under_review": frozenset(REVIEW_DESKS),
    "needs_revision": NEEDS_ATTENTION,
    "ready_for_review": frozenset({S.READY_FOR_REVIEW}),
    "approved": PUBLISHABLE,
    "in_progress": frozenset({S.IN_PROGRESS, S.ASSIGNED}),
    "on_hold": frozenset({S.ON_HOLD, S.OVERDUE}),
    "all": frozenset(s for s in S if is_in_workflow(s)),
}


def filter_statuses(name: str) -> FrozenSet[S]:
    """
    Resolve a named workflow filter to its status set

    Raises:
        ValidationError: If the filter name is unknown
    """
    try:
        return WORKFLOW_FILTERS[name.lower()]
    except KeyError:
        raise ValidationError(
            f"Unknown workflow filter: {name}",
            details={"filter": name, "allowed": sorted(WORKFLOW_FILTERS)}
        )
