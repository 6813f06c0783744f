"""Service Registry - Process-wide wiring of repositories, engine and services"""
from functools import lru_cache

from ..config.settings import settings
from ..engine.audit_writer import AuditWriter
from ..engine.engine import WorkflowEngine
from ..engine.permission_guard import PermissionGuard
from ..repositories.article_repo import (
    ArticleRepository, InMemoryArticleRepository, MongoArticleRepository
)
from ..repositories.audit_repo import (
    AuditRepository, InMemoryAuditRepository, MongoAuditRepository
)
from .article_service import ArticleService
from .dashboard_service import DashboardService


@lru_cache()
def get_article_repository() -> ArticleRepository:
    if settings.uses_memory_store:
        return InMemoryArticleRepository()
    return MongoArticleRepository()


@lru_cache()
def get_audit_repository() -> AuditRepository:
    if settings.uses_memory_store:
        return InMemoryAuditRepository()
    return MongoAuditRepository()


@lru_cache()
def get_audit_writer() -> AuditWriter:
    return AuditWriter(get_audit_repository())


@lru_cache()
def get_workflow_engine() -> WorkflowEngine:
    return WorkflowEngine(get_article_repository(), audit_writer=get_audit_writer())


@lru_cache()
def get_permission_guard() -> PermissionGuard:
    return PermissionGuard()


def get_article_service() -> ArticleService:
    return ArticleService(get_article_repository(), get_audit_writer())


def get_dashboard_service() -> DashboardService:
    return DashboardService(get_article_repository())
