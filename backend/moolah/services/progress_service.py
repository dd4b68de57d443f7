"""Spending and savings progress summary."""

from datetime import date
from decimal import Decimal
from typing import Dict, Optional

from moolah.models.transaction import TransactionType
from moolah.schemas.progress import BudgetProgress, CategoryTotal, GoalProgress, ProgressSummary
from moolah.services.budget_service import with_spending
from moolah.services.derivation import to_decimal, with_goal_progress
from moolah.store import ListQuery, RangeFilter, RecordStore


def get_summary(
    store: RecordStore,
    owner_id: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> ProgressSummary:
    """
    Income/expense totals over the date range (all time when open), expenses
    by category, and where every budget and goal currently stands.
    """
    ranges = [RangeFilter("date", start_date, end_date)] if (start_date or end_date) else []
    transactions = store.list("transactions", owner_id, ListQuery(ranges=ranges)).items

    total_income = sum(
        (to_decimal(t["amount"]) for t in transactions if t["type"] == TransactionType.income),
        Decimal("0"),
    )
    total_expenses = sum(
        (to_decimal(t["amount"]) for t in transactions if t["type"] == TransactionType.expense),
        Decimal("0"),
    )

    category_totals: Dict[str, Decimal] = {}
    for t in transactions:
        if t["type"] == TransactionType.expense:
            cat_id = str(t["category_id"]) if t.get("category_id") else "uncategorized"
            category_totals[cat_id] = category_totals.get(cat_id, Decimal("0")) + to_decimal(t["amount"])

    categories = {str(c["id"]): c["name"] for c in store.list("categories", owner_id).items}
    categories["uncategorized"] = "Uncategorized"

    by_category = [
        CategoryTotal(
            category_id=cat_id,
            category_name=categories.get(cat_id, "Unknown"),
            amount=float(amount),
            percent=round(float(amount / total_expenses * 100), 1) if total_expenses > 0 else 0,
        )
        for cat_id, amount in sorted(category_totals.items(), key=lambda x: x[1], reverse=True)
    ]

    budgets = []
    for budget in store.list("budgets", owner_id, ListQuery(order_by=[("created_at", True)])).items:
        budget = with_spending(store, owner_id, budget)
        amount = to_decimal(budget["amount"])
        budgets.append(BudgetProgress(
            id=str(budget["id"]),
            name=budget["name"],
            currency=budget["currency"],
            amount=float(amount),
            spent=float(budget["spent"]),
            remaining=float(budget["remaining"]),
            percent_used=round(float(budget["spent"] / amount * 100), 1) if amount > 0 else None,
        ))

    goals = []
    for goal in store.list("goals", owner_id, ListQuery(order_by=[("created_at", True)])).items:
        goal = with_goal_progress(goal)
        target = to_decimal(goal["target_amount"])
        current = to_decimal(goal["current_amount"])
        goals.append(GoalProgress(
            id=str(goal["id"]),
            title=goal["title"],
            currency=goal["currency"],
            target_amount=float(target),
            current_amount=float(current),
            remaining=float(max(Decimal("0"), target - current)),
            progress=goal["progress"],
            status=goal["status"],
        ))

    return ProgressSummary(
        start_date=start_date,
        end_date=end_date,
        total_income=float(total_income),
        total_expenses=float(total_expenses),
        net=float(total_income - total_expenses),
        by_category=by_category,
        budgets=budgets,
        goals=goals,
    )
