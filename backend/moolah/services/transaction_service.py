"""Transaction rules: category references and owner-scoped CRUD."""

from datetime import date
from decimal import Decimal
from typing import Optional

from moolah.errors import CategoryTypeMismatch, NotFound, ValidationFailed
from moolah.models.category import CategoryType
from moolah.schemas.transaction import TransactionCreate, TransactionUpdate
from moolah.services.validation import ensure_valid, missing_transaction_category
from moolah.store import ListQuery, Page, RangeFilter, Record, RecordStore

COLLECTION = "transactions"


def enum_value(value):
    return getattr(value, "value", value)


def check_category(
    store: RecordStore,
    owner_id: str,
    category_id: Optional[str],
    txn_type,
    must_exist: bool = True,
) -> None:
    """
    The category must be the owner's, and an income/expense category must match the type.

    With must_exist=False a reference to a deleted category is skipped.
    """
    if not category_id:
        return
    try:
        category = store.get("categories", owner_id, category_id)
    except NotFound:
        if not must_exist:
            return
        raise ValidationFailed(["category_id: category does not exist"]) from None

    category_type = category.get("type")
    if category_type != CategoryType.transfer and category_type != txn_type:
        raise CategoryTypeMismatch(
            f"An {enum_value(txn_type)} transaction cannot use the "
            f"{enum_value(category_type)} category '{category['name']}'"
        )


def list_transactions(
    store: RecordStore,
    owner_id: str,
    type: Optional[str] = None,
    category_id: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    min_amount: Optional[Decimal] = None,
    max_amount: Optional[Decimal] = None,
    search: Optional[str] = None,
    limit: Optional[int] = None,
    offset: int = 0,
) -> Page:
    """List transactions, most recent first."""
    equals = {}
    if type:
        equals["type"] = type
    if category_id:
        equals["category_id"] = category_id

    ranges = []
    if start_date or end_date:
        ranges.append(RangeFilter("date", start_date, end_date))
    if min_amount is not None or max_amount is not None:
        ranges.append(RangeFilter("amount", min_amount, max_amount))

    return store.list(COLLECTION, owner_id, ListQuery(
        equals=equals,
        ranges=ranges,
        search=("description", search) if search else None,
        order_by=[("date", True), ("created_at", True)],
        limit=limit,
        offset=offset,
    ))


def get_transaction(store: RecordStore, owner_id: str, transaction_id: str) -> Record:
    return store.get(COLLECTION, owner_id, transaction_id)


def create_transaction(store: RecordStore, owner_id: str, data: TransactionCreate) -> Record:
    ensure_valid(missing_transaction_category(data.category_id))
    check_category(store, owner_id, data.category_id, data.type)
    return store.create(COLLECTION, owner_id, data.model_dump())


def update_transaction(
    store: RecordStore,
    owner_id: str,
    transaction_id: str,
    update: TransactionUpdate,
) -> Record:
    existing = store.get(COLLECTION, owner_id, transaction_id)

    changes = update.changes()
    if "category_id" in changes:
        ensure_valid(missing_transaction_category(changes["category_id"]))
    if "category_id" in changes or "type" in changes:
        check_category(
            store,
            owner_id,
            changes.get("category_id", existing.get("category_id")),
            changes.get("type", existing.get("type")),
            must_exist="category_id" in changes,
        )

    return store.patch(COLLECTION, owner_id, transaction_id, changes)


def delete_transaction(store: RecordStore, owner_id: str, transaction_id: str) -> None:
    store.delete(COLLECTION, owner_id, transaction_id)
