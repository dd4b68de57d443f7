"""
Derived fields: goal status/progress and budget spent/remaining.

Pure functions, recomputed on every read. Stored status is only trusted for
the explicit "archived" marker.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Mapping, Optional

from moolah.models.goal import GoalStatus
from moolah.models.transaction import TransactionType
from moolah.store.base import Record

HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_date(value: Any) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def goal_status(current: Any, target: Any, explicit_status: Optional[str] = None) -> GoalStatus:
    if explicit_status == GoalStatus.archived:
        return GoalStatus.archived
    target = to_decimal(target)
    if target > 0 and to_decimal(current) >= target:
        return GoalStatus.completed
    return GoalStatus.active


def goal_progress(current: Any, target: Any) -> Optional[int]:
    """Percent of target reached, rounded half up and clamped to 0-100."""
    target = to_decimal(target)
    if target <= 0:
        return None
    percent = (to_decimal(current) / target * HUNDRED).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return max(0, min(100, int(percent)))


def with_goal_progress(goal: Record) -> Record:
    """Copy of a goal record with status and progress recomputed."""
    return {
        **goal,
        "status": goal_status(goal.get("current_amount"), goal.get("target_amount"), goal.get("status")),
        "progress": goal_progress(goal.get("current_amount"), goal.get("target_amount")),
    }


def budget_spent(
    transactions: Iterable[Mapping[str, Any]],
    category_id: Optional[str],
    period_start: Any = None,
    period_end: Any = None,
) -> Decimal:
    """
    Sum of expense amounts booked to exactly ``category_id``.

    Period bounds are inclusive and only applied when given. Amounts are
    summed as-is; no currency conversion happens.
    """
    period_start, period_end = to_date(period_start), to_date(period_end)
    total = Decimal("0")
    for txn in transactions:
        if txn.get("type") != TransactionType.expense:
            continue
        if category_id is None or str(txn.get("category_id")) != str(category_id):
            continue
        booked = to_date(txn.get("date"))
        if period_start and (booked is None or booked < period_start):
            continue
        if period_end and (booked is None or booked > period_end):
            continue
        total += to_decimal(txn.get("amount"))
    return total


def budget_remaining(amount: Any, spent: Any) -> Decimal:
    return to_decimal(amount) - to_decimal(spent)
