"""Services - business logic above the workflow engine"""
from .article_service import ArticleService
from .dashboard_service import DashboardService

__all__ = ["ArticleService", "DashboardService"]
