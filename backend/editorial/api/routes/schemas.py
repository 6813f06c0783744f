"""
Article Workflow Schemas

Request and response models for the article workflow API.
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from ...domain.enums import ArticleStatus, WorkflowAction
from ...domain.models import (
    ArticleWorkflowState, BulkItem, StateClassification, TransitionInputs,
    TransitionResult
)


# =============================================================================
# Article Schemas
# =============================================================================

class CreateArticleRequest(BaseModel):
    """Request to register an article with the workflow"""
    title: Optional[str] = Field(None, max_length=500)
    author_id: Optional[str] = Field(None, description="Defaults to the acting user")
    initial_status: ArticleStatus = ArticleStatus.DRAFT
    article_id: Optional[str] = Field(None, min_length=1, max_length=100)


class ArticleListResponse(BaseModel):
    """Response for article list"""
    items: List[ArticleWorkflowState]
    skip: int
    limit: int
    count: int


# =============================================================================
# Transition Schemas
# =============================================================================

class TransitionRequest(BaseModel):
    """Request to apply one action to one article"""
    action: WorkflowAction
    expected_status: ArticleStatus = Field(..., description="Status the caller last saw")
    inputs: Optional[TransitionInputs] = None


class BulkTransitionRequest(BaseModel):
    """Request to apply the same action to several articles"""
    action: WorkflowAction
    items: List[BulkItem] = Field(..., min_length=1, max_length=500)
    inputs: Optional[TransitionInputs] = None


class BulkTransitionResponse(BaseModel):
    """Per-item results of a bulk request"""
    action: WorkflowAction
    succeeded: int
    failed: int
    results: List[TransitionResult]


class TransitionOptionsResponse(BaseModel):
    """Actions the actor may take on an article right now"""
    article_id: str
    status: ArticleStatus
    actions: List[WorkflowAction]


# =============================================================================
# Workflow Reference Schemas
# =============================================================================

class StateInfo(BaseModel):
    """One status with its classification"""
    status: ArticleStatus
    display_name: str
    classification: StateClassification
    terminal: bool
    actions: List[WorkflowAction] = Field(default_factory=list)
