"""Status classification predicates and named workflow filters"""
import pytest

from editorial.domain.enums import ArticleStatus as S
from editorial.domain.errors import ValidationError
from editorial.engine.classification import (
    WORKFLOW_FILTERS, classify, filter_statuses, is_in_workflow, is_publishable,
    is_reviewable, is_schedulable, is_terminal, needs_attention, is_pending_review
)


OUT_OF_WORKFLOW = {
    S.DRAFT, S.PUBLISHED, S.REJECTED, S.ARCHIVED, S.RETRACTED, S.UNPUBLISHED, S.EXPIRED,
}


@pytest.mark.parametrize("status", list(S))
def test_every_status_is_classified(status):
    result = classify(status)

    assert result.in_workflow == (status not in OUT_OF_WORKFLOW)
    assert result.reviewable == is_reviewable(status)
    assert result.publishable == is_publishable(status)
    assert result.schedulable == is_schedulable(status)
    assert status.display_name


def test_reviewable_statuses():
    assert {s for s in S if is_reviewable(s)} == {
        S.READY_FOR_REVIEW, S.UNDER_REVIEW, S.NEEDS_REVISION,
        S.FACT_CHECKING, S.LEGAL_REVIEW, S.COPY_EDIT, S.PROOFREADING,
    }


def test_publishable_and_schedulable():
    assert {s for s in S if is_publishable(s)} == {S.APPROVED, S.SCHEDULED}
    assert {s for s in S if is_schedulable(s)} == {S.APPROVED}


def test_legacy_states_are_in_workflow():
    for status in (S.PENDING_APPROVAL, S.OVERDUE, S.RUSH, S.UPDATED):
        assert is_in_workflow(status)


def test_attention_and_pending_review():
    assert needs_attention(S.NEEDS_REVISION)
    assert needs_attention(S.RETURNED_TO_WRITER)
    assert not needs_attention(S.UNDER_REVIEW)

    assert is_pending_review(S.PENDING_APPROVAL)
    assert is_pending_review(S.READY_FOR_REVIEW)
    assert not is_pending_review(S.APPROVED)


def test_terminal_states_are_outside_workflow():
    for status in S:
        if is_terminal(status):
            assert not is_in_workflow(status)


def test_workflow_filters_only_name_in_workflow_statuses():
    for name, statuses in WORKFLOW_FILTERS.items():
        assert statuses, name
        assert all(is_in_workflow(s) for s in statuses), name


def test_filter_lookup_is_case_insensitive():
    assert filter_statuses("ON_HOLD") == {S.ON_HOLD, S.OVERDUE}


def test_unknown_filter_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        filter_statuses("everything")

    assert "all" in exc_info.value.details["allowed"]
