"""
Savings goal API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional
from datetime import date

from moolah.config import clamp_page_size
from moolah.dependencies import get_current_user, get_store
from moolah.identity import Identity
from moolah.models.goal import GoalStatus
from moolah.schemas.goal import (
    GoalCreate,
    GoalResponse,
    GoalUpdate,
    GoalListResponse
)
from moolah.services import goal_service
from moolah.store import RecordStore

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=GoalListResponse)
def list_goals(
    page: int = Query(1, ge=1),
    per_page: Optional[int] = None,
    status: Optional[GoalStatus] = None,
    category_id: Optional[str] = None,
    due_from: Optional[date] = None,
    due_to: Optional[date] = None,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    """
    List goals, newest first.
    The status filter matches the derived status, so a goal whose saved
    amount reached its target is listed under completed.
    """
    per_page = clamp_page_size(per_page)
    result = goal_service.list_goals(
        store,
        current_user.uid,
        status=status,
        category_id=category_id,
        due_from=due_from,
        due_to=due_to,
        limit=per_page,
        offset=(page - 1) * per_page,
    )

    return GoalListResponse(
        items=[GoalResponse.model_validate(g) for g in result.items],
        total=result.total,
        page=page,
        per_page=per_page,
        pages=(result.total + per_page - 1) // per_page
    )


@router.post("", response_model=GoalResponse, status_code=201)
def create_goal(
    goal: GoalCreate,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    return goal_service.create_goal(store, current_user.uid, goal)


@router.get("/{goal_id}", response_model=GoalResponse)
def get_goal(
    goal_id: str,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    return goal_service.get_goal(store, current_user.uid, goal_id)


@router.patch("/{goal_id}", response_model=GoalResponse)
@router.put("/{goal_id}", response_model=GoalResponse)
def update_goal(
    goal_id: str,
    update: GoalUpdate,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    return goal_service.update_goal(store, current_user.uid, goal_id, update)


@router.delete("/{goal_id}", status_code=204)
def delete_goal(
    goal_id: str,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    goal_service.delete_goal(store, current_user.uid, goal_id)
    return None
