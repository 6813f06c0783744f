"""
Pytest Configuration and Fixtures

This file contains shared fixtures and configuration for all tests.
"""

import os

# Must be set before anything imports editorial.config
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["LOG_TO_FILE"] = "false"
os.environ["PUBLISH_SCHEDULER_ENABLED"] = "false"

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from editorial.domain.enums import ArticleStatus
from editorial.domain.models import ActorContext, ArticleWorkflowState
from editorial.engine.audit_writer import AuditWriter
from editorial.engine.engine import WorkflowEngine
from editorial.repositories.article_repo import InMemoryArticleRepository
from editorial.repositories.audit_repo import InMemoryAuditRepository
from editorial.services.article_service import ArticleService
from editorial.services.dashboard_service import DashboardService


NOW = datetime(2025, 3, 14, 9, 30, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic clock; call it like utc_now"""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_state(
    status: ArticleStatus,
    article_id: str = "ART-1",
    updated_at: Optional[datetime] = None,
    **fields
) -> ArticleWorkflowState:
    """Build a workflow state without going through the engine"""
    stamp = updated_at or NOW - timedelta(days=1)
    return ArticleWorkflowState(
        article_id=article_id,
        status=status,
        title=fields.pop("title", f"Story {article_id}"),
        author_id=fields.pop("author_id", "writer-1"),
        created_at=fields.pop("created_at", stamp),
        updated_at=stamp,
        **fields
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def article_repo() -> InMemoryArticleRepository:
    return InMemoryArticleRepository()


@pytest.fixture
def audit_repo() -> InMemoryAuditRepository:
    return InMemoryAuditRepository()


@pytest.fixture
def audit_writer(audit_repo) -> AuditWriter:
    return AuditWriter(audit_repo)


@pytest.fixture
def engine(article_repo, audit_writer, clock) -> WorkflowEngine:
    return WorkflowEngine(article_repo, audit_writer=audit_writer, clock=clock)


@pytest.fixture
def article_service(article_repo, audit_writer, clock) -> ArticleService:
    return ArticleService(article_repo, audit_writer, clock=clock)


@pytest.fixture
def dashboard_service(article_repo) -> DashboardService:
    return DashboardService(article_repo)


@pytest.fixture
def seed(article_repo):
    """Insert an article in the given status and return it"""
    def _seed(status: ArticleStatus, article_id: str = "ART-1", **fields) -> ArticleWorkflowState:
        return article_repo.create(make_state(status, article_id=article_id, **fields))
    return _seed


@pytest.fixture
def editor() -> ActorContext:
    return ActorContext(actor_id="editor-1", roles=["EDITOR"])


@pytest.fixture
def author() -> ActorContext:
    return ActorContext(actor_id="writer-1", roles=["AUTHOR"])
