"""Transition table shape and per-status legal actions"""
import pytest

from editorial.domain.enums import ArticleStatus as S, WorkflowAction as A, TransitionInput
from editorial.engine.transition_table import (
    TRANSITIONS, get_rule, list_transitions_for, next_desk, resolve_target
)


def test_every_action_has_a_rule():
    assert set(TRANSITIONS) == set(A)


def test_no_rule_targets_its_own_source():
    for rule in TRANSITIONS.values():
        if rule.to_status is not None:
            assert rule.to_status not in rule.from_statuses, rule.action


def test_flag_rules_apply_everywhere_and_keep_status():
    for action in (A.SET_FEATURED, A.SET_TRENDING):
        rule = get_rule(action)
        assert not rule.changes_status
        assert rule.from_statuses == frozenset(S)
        assert rule.required_inputs == (TransitionInput.FLAG,)


def test_required_inputs():
    assert get_rule(A.REJECT).required_inputs == (TransitionInput.REASON,)
    assert get_rule(A.REQUEST_REVISION).required_inputs == (TransitionInput.FEEDBACK,)
    assert get_rule(A.RETURN_TO_WRITER).required_inputs == (TransitionInput.FEEDBACK,)
    assert get_rule(A.SCHEDULE).required_inputs == (TransitionInput.SCHEDULED_AT,)
    assert get_rule(A.PUBLISH).required_inputs == ()


def test_draft_actions():
    assert list_transitions_for(S.DRAFT) == {
        A.SUBMIT_FOR_REVIEW, A.START_WORK, A.ASSIGN, A.REJECT, A.RETURN_TO_WRITER,
        A.ARCHIVE, A.SET_FEATURED, A.SET_TRENDING,
    }


def test_published_actions():
    assert list_transitions_for(S.PUBLISHED) == {
        A.UNPUBLISH, A.RETRACT, A.EXPIRE, A.ARCHIVE, A.SET_FEATURED, A.SET_TRENDING,
    }


def test_archived_can_only_be_restored():
    assert list_transitions_for(S.ARCHIVED) == {A.RESTORE, A.SET_FEATURED, A.SET_TRENDING}


@pytest.mark.parametrize("status", [S.DRAFT, S.IN_PROGRESS, S.READY_FOR_REVIEW, S.UNDER_REVIEW])
def test_cannot_publish_before_approval(status):
    assert A.PUBLISH not in list_transitions_for(status)
    assert A.SCHEDULE not in list_transitions_for(status)


def test_approve_requires_review():
    assert A.APPROVE not in list_transitions_for(S.DRAFT)
    assert A.APPROVE in list_transitions_for(S.PROOFREADING)


def test_scheduled_cannot_be_held():
    assert A.PUT_ON_HOLD not in list_transitions_for(S.SCHEDULED)
    assert A.PUT_ON_HOLD in list_transitions_for(S.APPROVED)


def test_review_desks_advance_in_order():
    assert next_desk(S.UNDER_REVIEW) == S.FACT_CHECKING
    assert next_desk(S.FACT_CHECKING) == S.LEGAL_REVIEW
    assert next_desk(S.LEGAL_REVIEW) == S.COPY_EDIT
    assert next_desk(S.COPY_EDIT) == S.PROOFREADING
    assert A.ADVANCE_STAGE not in list_transitions_for(S.PROOFREADING)


def test_resume_target():
    rule = get_rule(A.RESUME)
    assert resolve_target(rule, S.ON_HOLD, S.COPY_EDIT) == S.COPY_EDIT
    assert resolve_target(rule, S.ON_HOLD, None) == S.IN_PROGRESS
