"""Workflow Engine - The article status state machine"""
from .engine import WorkflowEngine
from .state_machine import ArticleStateMachine
from .permission_guard import PermissionGuard
from .audit_writer import AuditWriter
from .classification import classify
from .transition_table import list_transitions_for

__all__ = [
    "WorkflowEngine",
    "ArticleStateMachine",
    "PermissionGuard",
    "AuditWriter",
    "classify",
    "list_transitions_for",
]
