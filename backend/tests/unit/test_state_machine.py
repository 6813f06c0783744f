"""Pure transition evaluation (no store involved)"""
from datetime import datetime, timedelta

import pytest

from editorial.domain.enums import ArticleStatus as S, WorkflowAction as A
from editorial.domain.errors import InvalidTransitionError, MissingInputError, InvalidInputError
from editorial.domain.models import TransitionInputs
from editorial.engine.state_machine import ArticleStateMachine
from tests.conftest import NOW, make_state


@pytest.fixture
def machine():
    return ArticleStateMachine()


def test_submit_moves_draft_to_ready(machine):
    current = make_state(S.DRAFT)

    proposed = machine.evaluate(current, A.SUBMIT_FOR_REVIEW, None, NOW)

    assert proposed.status == S.READY_FOR_REVIEW
    assert proposed.updated_at == NOW
    assert current.status == S.DRAFT


def test_evaluation_is_deterministic(machine):
    current = make_state(S.UNDER_REVIEW)
    inputs = TransitionInputs(feedback="Tighten the lede")

    first = machine.evaluate(current, A.REQUEST_REVISION, inputs, NOW)
    second = machine.evaluate(current, A.REQUEST_REVISION, inputs, NOW)

    assert first == second


def test_illegal_action_is_rejected(machine):
    with pytest.raises(InvalidTransitionError) as exc_info:
        machine.evaluate(make_state(S.DRAFT), A.PUBLISH, None, NOW)

    assert exc_info.value.details["current_status"] == "DRAFT"


def test_legality_is_checked_before_inputs(machine):
    with pytest.raises(InvalidTransitionError):
        machine.evaluate(make_state(S.PUBLISHED), A.REJECT, None, NOW)


@pytest.mark.parametrize("reason", [None, "", "   "])
def test_reject_requires_reason(machine, reason):
    with pytest.raises(MissingInputError) as exc_info:
        machine.evaluate(make_state(S.UNDER_REVIEW), A.REJECT, TransitionInputs(reason=reason), NOW)

    assert exc_info.value.details["input"] == "reason"


def test_reject_records_reason_as_feedback(machine):
    proposed = machine.evaluate(
        make_state(S.UNDER_REVIEW), A.REJECT, TransitionInputs(reason="  Off topic "), NOW
    )

    assert proposed.status == S.REJECTED
    assert proposed.feedback == "Off topic"


def test_return_to_writer_requires_feedback(machine):
    with pytest.raises(MissingInputError):
        machine.evaluate(make_state(S.COPY_EDIT), A.RETURN_TO_WRITER, TransitionInputs(), NOW)


def test_schedule_requires_time(machine):
    with pytest.raises(MissingInputError):
        machine.evaluate(make_state(S.APPROVED), A.SCHEDULE, None, NOW)


@pytest.mark.parametrize("offset", [timedelta(0), timedelta(minutes=-5)])
def test_schedule_rejects_past_or_present(machine, offset):
    inputs = TransitionInputs(scheduled_at=NOW + offset)

    with pytest.raises(InvalidInputError):
        machine.evaluate(make_state(S.APPROVED), A.SCHEDULE, inputs, NOW)


def test_schedule_sets_publish_time(machine):
    when = NOW + timedelta(hours=3)

    proposed = machine.evaluate(
        make_state(S.APPROVED), A.SCHEDULE, TransitionInputs(scheduled_at=when), NOW
    )

    assert proposed.status == S.SCHEDULED
    assert proposed.scheduled_at == when


def test_naive_schedule_time_is_utc(machine):
    naive = datetime(2025, 3, 15, 8, 0)

    proposed = machine.evaluate(
        make_state(S.APPROVED), A.SCHEDULE, TransitionInputs(scheduled_at=naive), NOW
    )

    assert proposed.scheduled_at.tzinfo is not None
    assert proposed.scheduled_at.replace(tzinfo=None) == naive


def test_publish_from_scheduled_clears_schedule(machine):
    current = make_state(S.SCHEDULED, scheduled_at=NOW + timedelta(hours=1))

    proposed = machine.evaluate(current, A.PUBLISH, None, NOW)

    assert proposed.status == S.PUBLISHED
    assert proposed.scheduled_at is None
    assert proposed.published_at == NOW


def test_leaving_scheduled_clears_schedule(machine):
    current = make_state(S.SCHEDULED, scheduled_at=NOW + timedelta(hours=1))

    proposed = machine.evaluate(current, A.ARCHIVE, None, NOW)

    assert proposed.scheduled_at is None


def test_unpublish_and_retract_clear_published_at(machine):
    current = make_state(S.PUBLISHED, published_at=NOW - timedelta(days=2))

    assert machine.evaluate(current, A.UNPUBLISH, None, NOW).published_at is None

    retracted = machine.evaluate(current, A.RETRACT, TransitionInputs(reason="Legal"), NOW)
    assert retracted.status == S.RETRACTED
    assert retracted.published_at is None
    assert retracted.feedback == "Legal"


def test_set_featured_keeps_status(machine):
    current = make_state(S.PUBLISHED)

    proposed = machine.evaluate(current, A.SET_FEATURED, TransitionInputs(flag=True), NOW)

    assert proposed.status == S.PUBLISHED
    assert proposed.featured is True
    assert proposed.trending is False
    assert proposed.updated_at == NOW


def test_flag_is_required(machine):
    with pytest.raises(MissingInputError):
        machine.evaluate(make_state(S.DRAFT), A.SET_TRENDING, None, NOW)


def test_hold_and_resume_restore_previous_status(machine):
    held = machine.evaluate(
        make_state(S.LEGAL_REVIEW), A.PUT_ON_HOLD, TransitionInputs(reason="Awaiting counsel"), NOW
    )
    assert held.status == S.ON_HOLD
    assert held.held_from == S.LEGAL_REVIEW

    resumed = machine.evaluate(held, A.RESUME, None, NOW)
    assert resumed.status == S.LEGAL_REVIEW
    assert resumed.held_from is None


def test_assign_and_unassign(machine):
    assigned = machine.evaluate(
        make_state(S.DRAFT), A.ASSIGN, TransitionInputs(assignee_id="writer-7"), NOW
    )
    assert assigned.status == S.ASSIGNED
    assert assigned.author_id == "writer-7"

    unassigned = machine.evaluate(assigned, A.UNASSIGN, None, NOW)
    assert unassigned.status == S.UNASSIGNED
    assert unassigned.author_id is None


def test_advance_stage_walks_review_desks(machine):
    proposed = machine.evaluate(make_state(S.FACT_CHECKING), A.ADVANCE_STAGE, None, NOW)

    assert proposed.status == S.LEGAL_REVIEW
