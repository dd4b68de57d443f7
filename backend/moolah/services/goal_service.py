"""Savings goals with derived status and progress."""

from datetime import date
from typing import Optional

from moolah.errors import NotFound, ValidationFailed
from moolah.schemas.goal import GoalCreate, GoalUpdate
from moolah.services.derivation import with_goal_progress
from moolah.store import ListQuery, Page, RangeFilter, Record, RecordStore

COLLECTION = "goals"


def check_category(store: RecordStore, owner_id: str, category_id: Optional[str]) -> None:
    if not category_id:
        return
    try:
        store.get("categories", owner_id, category_id)
    except NotFound:
        raise ValidationFailed(["category_id: category does not exist"]) from None


def list_goals(
    store: RecordStore,
    owner_id: str,
    status: Optional[str] = None,
    category_id: Optional[str] = None,
    due_from: Optional[date] = None,
    due_to: Optional[date] = None,
    limit: Optional[int] = None,
    offset: int = 0,
) -> Page:
    """
    List goals, newest first.

    Status is derived from the amounts, so the status filter runs after the
    store query and paging is applied to the filtered result.
    """
    equals = {"category_id": category_id} if category_id else {}
    ranges = [RangeFilter("due_date", due_from, due_to)] if (due_from or due_to) else []

    goals = store.list(COLLECTION, owner_id, ListQuery(
        equals=equals,
        ranges=ranges,
        order_by=[("created_at", True)],
    )).items
    goals = [with_goal_progress(goal) for goal in goals]
    if status:
        goals = [goal for goal in goals if goal["status"] == status]

    end = None if limit is None else offset + limit
    return Page(items=goals[offset:end], total=len(goals))


def get_goal(store: RecordStore, owner_id: str, goal_id: str) -> Record:
    return with_goal_progress(store.get(COLLECTION, owner_id, goal_id))


def create_goal(store: RecordStore, owner_id: str, data: GoalCreate) -> Record:
    check_category(store, owner_id, data.category_id)
    return with_goal_progress(store.create(COLLECTION, owner_id, data.model_dump()))


def update_goal(store: RecordStore, owner_id: str, goal_id: str, update: GoalUpdate) -> Record:
    store.get(COLLECTION, owner_id, goal_id)

    changes = update.changes()
    if changes.get("category_id"):
        check_category(store, owner_id, changes["category_id"])

    return with_goal_progress(store.patch(COLLECTION, owner_id, goal_id, changes))


def delete_goal(store: RecordStore, owner_id: str, goal_id: str) -> None:
    store.delete(COLLECTION, owner_id, goal_id)
