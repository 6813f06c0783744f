"""Workflow reference routes - statuses, classification and legal actions"""
from typing import List

from fastapi import APIRouter

from ...domain.enums import ArticleStatus
from ...engine.classification import classify, is_terminal
from ...engine.transition_table import list_transitions_for
from .schemas import StateInfo

router = APIRouter()


def _state_info(status: ArticleStatus) -> StateInfo:
    return StateInfo(
        status=status,
        display_name=status.display_name,
        classification=classify(status),
        terminal=is_terminal(status),
        actions=sorted(list_transitions_for(status), key=lambda a: a.value),
    )


@router.get("/states", response_model=List[StateInfo])
async def list_states():
    """Every status in declaration order"""
    return [_state_info(status) for status in ArticleStatus]


@router.get("/states/{status}", response_model=StateInfo)
async def get_state(status: ArticleStatus):
    return _state_info(status)
