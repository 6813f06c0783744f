"""Mongo repositories against mongomock collections"""
from datetime import timedelta

import mongomock
import pytest

from editorial.domain.enums import ArticleStatus as S, AuditEventType, WorkflowAction as A
from editorial.domain.errors import (
    AlreadyExistsError, ArticleNotFoundError, ConcurrentModificationError
)
from editorial.domain.models import AuditEvent
from editorial.engine.audit_writer import AuditWriter
from editorial.engine.engine import WorkflowEngine
from editorial.repositories.article_repo import MongoArticleRepository
from editorial.repositories.audit_repo import MongoAuditRepository
from tests.conftest import NOW, make_state


@pytest.fixture
def database():
    return mongomock.MongoClient()["editorial_test"]


@pytest.fixture
def repo(database):
    return MongoArticleRepository(database["article_workflow"])


@pytest.fixture
def audit(database):
    return MongoAuditRepository(database["audit_events"])


def test_create_and_get(repo):
    state = make_state(S.ON_HOLD, held_from=S.COPY_EDIT, featured=True)

    repo.create(state)

    assert repo.get("ART-1") == state
    assert repo.get("ART-404") is None


def test_duplicate_create(repo):
    repo.create(make_state(S.DRAFT))

    with pytest.raises(AlreadyExistsError):
        repo.create(make_state(S.DRAFT))


def test_compare_and_set_bumps_version(repo):
    current = repo.create(make_state(S.APPROVED))
    proposed = current.model_copy(update={
        "status": S.SCHEDULED, "scheduled_at": NOW + timedelta(days=1), "updated_at": NOW
    })

    written = repo.compare_and_set("ART-1", S.APPROVED, 1, proposed)

    assert written.version == 2
    assert written.status == S.SCHEDULED
    assert written.scheduled_at == NOW + timedelta(days=1)
    assert repo.get("ART-1") == written


def test_compare_and_set_rejects_stale_writes(repo):
    current = repo.create(make_state(S.APPROVED))
    repo.compare_and_set("ART-1", S.APPROVED, 1, current.model_copy(update={"status": S.PUBLISHED}))

    with pytest.raises(ConcurrentModificationError):
        repo.compare_and_set("ART-1", S.APPROVED, 1, current.model_copy(update={"status": S.ARCHIVED}))

    assert repo.get("ART-1").status == S.PUBLISHED


def test_compare_and_set_unknown_article(repo):
    with pytest.raises(ArticleNotFoundError):
        repo.compare_and_set("ART-404", S.DRAFT, 1, make_state(S.DRAFT, article_id="ART-404"))


def test_list_and_count(repo):
    repo.create(make_state(S.DRAFT, article_id="ART-1", updated_at=NOW - timedelta(days=2)))
    repo.create(make_state(S.DRAFT, article_id="ART-2", updated_at=NOW - timedelta(days=1)))
    repo.create(make_state(S.PUBLISHED, article_id="ART-3", author_id="writer-2"))

    drafts = repo.list_articles(statuses=[S.DRAFT])
    assert [a.article_id for a in drafts] == ["ART-2", "ART-1"]
    assert [a.article_id for a in repo.list_articles(author_id="writer-2")] == ["ART-3"]
    assert len(repo.list_articles(skip=1, limit=1)) == 1

    assert repo.count_by_status() == {S.DRAFT: 2, S.PUBLISHED: 1}


def test_engine_over_mongo(repo, audit):
    repo.create(make_state(S.READY_FOR_REVIEW))
    engine = WorkflowEngine(repo, audit_writer=AuditWriter(audit), clock=lambda: NOW)

    result = engine.apply_transition("ART-1", A.BEGIN_REVIEW, "EDITOR", None, S.READY_FOR_REVIEW)

    assert result.success
    assert repo.get("ART-1").status == S.UNDER_REVIEW
    events = audit.get_events_for_article("ART-1")
    assert [e.to_status for e in events] == [S.UNDER_REVIEW]


def test_audit_events_oldest_first(audit):
    for i, event_type in enumerate([AuditEventType.ARTICLE_CREATED, AuditEventType.STATUS_CHANGED]):
        audit.create_event(AuditEvent(
            audit_event_id=f"AUD-{i}",
            article_id="ART-1",
            event_type=event_type,
            timestamp=NOW + timedelta(minutes=i),
        ))

    events = audit.get_events_for_article("ART-1")
    assert [e.audit_event_id for e in events] == ["AUD-0", "AUD-1"]
    assert events[1].timestamp == NOW + timedelta(minutes=1)

    changed = audit.get_events_for_article("ART-1", event_types=[AuditEventType.STATUS_CHANGED])
    assert [e.audit_event_id for e in changed] == ["AUD-1"]


def test_audit_order_ignores_fraction_formatting(audit):
    # Written newest first; whole-second and fractional times mixed
    for event_id, timestamp in [
        ("AUD-2", NOW + timedelta(seconds=1)),
        ("AUD-1", NOW + timedelta(milliseconds=500)),
        ("AUD-0", NOW),
    ]:
        audit.create_event(AuditEvent(
            audit_event_id=event_id,
            article_id="ART-1",
            event_type=AuditEventType.STATUS_CHANGED,
            timestamp=timestamp,
        ))

    events = audit.get_events_for_article("ART-1")

    assert [e.audit_event_id for e in events] == ["AUD-0", "AUD-1", "AUD-2"]
    assert events[1].timestamp == NOW + timedelta(milliseconds=500)


def test_list_due_scheduled(repo):
    repo.create(make_state(
        S.SCHEDULED, article_id="ART-late", scheduled_at=NOW - timedelta(minutes=5),
        updated_at=NOW - timedelta(hours=1)
    ))
    repo.create(make_state(
        S.SCHEDULED, article_id="ART-early", scheduled_at=NOW - timedelta(hours=2),
        updated_at=NOW - timedelta(days=9)
    ))
    repo.create(make_state(
        S.SCHEDULED, article_id="ART-future", scheduled_at=NOW + timedelta(hours=1)
    ))
    repo.create(make_state(S.APPROVED, article_id="ART-approved"))

    due = repo.list_due_scheduled(NOW)

    assert [a.article_id for a in due] == ["ART-early", "ART-late"]
    assert [a.article_id for a in repo.list_due_scheduled(NOW, limit=1)] == ["ART-early"]
