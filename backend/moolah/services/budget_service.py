"""Budgets with derived spent and remaining."""

from datetime import date
from typing import List, Optional, Tuple

from moolah.config import settings
from moolah.errors import NotFound, ValidationFailed
from moolah.models.transaction import TransactionType
from moolah.schemas.budget import BudgetCreate, BudgetUpdate
from moolah.services.derivation import budget_remaining, budget_spent, to_date
from moolah.store import ListQuery, Page, RangeFilter, Record, RecordStore

COLLECTION = "budgets"


def spending_period(budget: Record) -> Tuple[Optional[date], Optional[date]]:
    """Bounds spent is measured over; open unless budget_spent_within_period is on."""
    if settings.budget_spent_within_period:
        return to_date(budget.get("period_start")), to_date(budget.get("period_end"))
    return None, None


def category_expenses(store: RecordStore, owner_id: str, budget: Record) -> List[Record]:
    """Expense transactions that count toward a budget."""
    period_start, period_end = spending_period(budget)
    ranges = [RangeFilter("date", period_start, period_end)] if (period_start or period_end) else []

    return store.list("transactions", owner_id, ListQuery(
        equals={"type": TransactionType.expense, "category_id": budget["category_id"]},
        ranges=ranges,
    )).items


def with_spending(store: RecordStore, owner_id: str, budget: Record) -> Record:
    """Copy of a budget record with spent and remaining computed."""
    spent = budget_spent(category_expenses(store, owner_id, budget), budget["category_id"], *spending_period(budget))
    return {**budget, "spent": spent, "remaining": budget_remaining(budget["amount"], spent)}


def check_category(store: RecordStore, owner_id: str, category_id: str) -> None:
    try:
        store.get("categories", owner_id, category_id)
    except NotFound:
        raise ValidationFailed(["category_id: category does not exist"]) from None


def list_budgets(
    store: RecordStore,
    owner_id: str,
    category_id: Optional[str] = None,
    limit: Optional[int] = None,
    offset: int = 0,
) -> Page:
    equals = {"category_id": category_id} if category_id else {}
    page = store.list(COLLECTION, owner_id, ListQuery(
        equals=equals,
        order_by=[("created_at", True)],
        limit=limit,
        offset=offset,
    ))
    return Page(items=[with_spending(store, owner_id, budget) for budget in page.items], total=page.total)


def get_budget(store: RecordStore, owner_id: str, budget_id: str) -> Record:
    return with_spending(store, owner_id, store.get(COLLECTION, owner_id, budget_id))


def create_budget(store: RecordStore, owner_id: str, data: BudgetCreate) -> Record:
    check_category(store, owner_id, data.category_id)
    budget = store.create(COLLECTION, owner_id, data.model_dump())
    return with_spending(store, owner_id, budget)


def update_budget(store: RecordStore, owner_id: str, budget_id: str, update: BudgetUpdate) -> Record:
    existing = store.get(COLLECTION, owner_id, budget_id)

    changes = update.changes()
    if "category_id" in changes:
        check_category(store, owner_id, changes["category_id"])

    period_start = to_date(changes.get("period_start", existing.get("period_start")))
    period_end = to_date(changes.get("period_end", existing.get("period_end")))
    if period_start and period_end and period_end < period_start:
        raise ValidationFailed(["period_end must not be before period_start"])

    budget = store.patch(COLLECTION, owner_id, budget_id, changes)
    return with_spending(store, owner_id, budget)


def delete_budget(store: RecordStore, owner_id: str, budget_id: str) -> None:
    store.delete(COLLECTION, owner_id, budget_id)
