"""Utility modules"""
from .logger import get_logger, setup_logging
from .idgen import generate_id, generate_article_id, generate_correlation_id
from .time import utc_now, format_iso, parse_iso

__all__ = [
    "get_logger",
    "setup_logging",
    "generate_id",
    "generate_article_id",
    "generate_correlation_id",
    "utc_now",
    "format_iso",
    "parse_iso",
]
