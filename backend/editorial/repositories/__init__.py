"""Repositories - storage boundary for articles and audit events"""
from .article_repo import (
    ArticleRepository, InMemoryArticleRepository, MongoArticleRepository
)
from .audit_repo import (
    AuditRepository, InMemoryAuditRepository, MongoAuditRepository
)

__all__ = [
    "ArticleRepository",
    "InMemoryArticleRepository",
    "MongoArticleRepository",
    "AuditRepository",
    "InMemoryAuditRepository",
    "MongoAuditRepository",
]
