"""
Transaction API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional
from datetime import date
from decimal import Decimal

from moolah.config import clamp_page_size
from moolah.dependencies import get_current_user, get_store
from moolah.identity import Identity
from moolah.models.transaction import TransactionType
from moolah.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
    TransactionListResponse
)
from moolah.services import transaction_service
from moolah.store import RecordStore

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    page: int = Query(1, ge=1),
    per_page: Optional[int] = None,
    type: Optional[TransactionType] = None,
    category_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    min_amount: Optional[Decimal] = None,
    max_amount: Optional[Decimal] = None,
    search: Optional[str] = None,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    """List transactions with filtering and pagination"""
    per_page = clamp_page_size(per_page)
    result = transaction_service.list_transactions(
        store,
        current_user.uid,
        type=type,
        category_id=category_id,
        start_date=start_date,
        end_date=end_date,
        min_amount=min_amount,
        max_amount=max_amount,
        search=search,
        limit=per_page,
        offset=(page - 1) * per_page,
    )
    pages = (result.total + per_page - 1) // per_page

    return TransactionListResponse(
        items=[TransactionResponse.model_validate(t) for t in result.items],
        total=result.total,
        page=page,
        per_page=per_page,
        pages=pages
    )


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    transaction: TransactionCreate,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    """Create a transaction"""
    return transaction_service.create_transaction(store, current_user.uid, transaction)


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    """Get a single transaction"""
    return transaction_service.get_transaction(store, current_user.uid, transaction_id)


@router.patch("/{transaction_id}", response_model=TransactionResponse)
@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    update: TransactionUpdate,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    """Update only the fields sent"""
    return transaction_service.update_transaction(store, current_user.uid, transaction_id, update)


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    """Delete a transaction"""
    transaction_service.delete_transaction(store, current_user.uid, transaction_id)
    return None
