"""
Budget API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from moolah.config import clamp_page_size
from moolah.dependencies import get_current_user, get_store
from moolah.identity import Identity
from moolah.schemas.budget import (
    BudgetCreate,
    BudgetResponse,
    BudgetUpdate,
    BudgetListResponse
)
from moolah.services import budget_service
from moolah.store import RecordStore

router = APIRouter(prefix="/budgets", tags=["budgets"])


@router.get("", response_model=BudgetListResponse)
def list_budgets(
    page: int = Query(1, ge=1),
    per_page: Optional[int] = None,
    category_id: Optional[str] = None,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    """List budgets with spent and remaining, newest first"""
    per_page = clamp_page_size(per_page)
    result = budget_service.list_budgets(
        store,
        current_user.uid,
        category_id=category_id,
        limit=per_page,
        offset=(page - 1) * per_page,
    )

    return BudgetListResponse(
        items=[BudgetResponse.model_validate(b) for b in result.items],
        total=result.total,
        page=page,
        per_page=per_page,
        pages=(result.total + per_page - 1) // per_page
    )


@router.post("", response_model=BudgetResponse, status_code=201)
def create_budget(
    budget: BudgetCreate,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    return budget_service.create_budget(store, current_user.uid, budget)


@router.get("/{budget_id}", response_model=BudgetResponse)
def get_budget(
    budget_id: str,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    return budget_service.get_budget(store, current_user.uid, budget_id)


@router.patch("/{budget_id}", response_model=BudgetResponse)
@router.put("/{budget_id}", response_model=BudgetResponse)
def update_budget(
    budget_id: str,
    update: BudgetUpdate,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    return budget_service.update_budget(store, current_user.uid, budget_id, update)


@router.delete("/{budget_id}", status_code=204)
def delete_budget(
    budget_id: str,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    budget_service.delete_budget(store, current_user.uid, budget_id)
    return None
