"""
Progress API endpoints.
"""

from fastapi import APIRouter, Depends
from datetime import date
from typing import Optional

from moolah.dependencies import get_current_user, get_store
from moolah.errors import ValidationFailed
from moolah.identity import Identity
from moolah.schemas.progress import ProgressSummary
from moolah.services.progress_service import get_summary
from moolah.store import RecordStore

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("/summary", response_model=ProgressSummary)
def get_progress_summary(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    """
    Get a progress summary.
    Returns: total_income, total_expenses, net, by_category over the date
    range (all time when omitted), plus every budget and goal.
    """
    if start_date and end_date and end_date < start_date:
        raise ValidationFailed(["end_date: must not be before start_date"])
    return get_summary(store, current_user.uid, start_date, end_date)
