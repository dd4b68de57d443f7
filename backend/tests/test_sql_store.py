"""Tests for the SQL record store."""

import pytest
from datetime import date
from decimal import Decimal

from moolah.errors import NotFound
from moolah.models.transaction import TransactionType
from moolah.store import ListQuery, RangeFilter


def add_transaction(store, owner_id, amount, booked, description="", category_id=None, type=TransactionType.expense):
    return store.create("transactions", owner_id, {
        "type": type,
        "amount": Decimal(amount),
        "date": booked,
        "description": description,
        "category_id": category_id,
    })


class TestOwnership:
    """Records are only visible to their owner."""

    def test_create_stamps_store_fields(self, store):
        record = store.create("categories", "alice-uid", {
            "name": "Food",
            "name_lower": "food",
            "id": "client-chosen",
            "owner_id": "mallory",
        })
        assert record["id"] != "client-chosen"
        assert record["owner_id"] == "alice-uid"
        assert record["created_at"] is not None
        assert record["updated_at"] is not None

    def test_foreign_record_looks_missing(self, store, sample_transaction):
        with pytest.raises(NotFound):
            store.get("transactions", "bob-uid", sample_transaction["id"])
        with pytest.raises(NotFound):
            store.patch("transactions", "bob-uid", sample_transaction["id"], {"description": "mine"})
        with pytest.raises(NotFound):
            store.delete("transactions", "bob-uid", sample_transaction["id"])

        assert store.get("transactions", "alice-uid", sample_transaction["id"])["description"] == "Whole Foods groceries"

    def test_list_is_owner_scoped(self, store, sample_transaction):
        assert store.list("transactions", "alice-uid").total == 1
        assert store.list("transactions", "bob-uid").total == 0

    def test_not_found_message(self, store):
        with pytest.raises(NotFound, match="Goal not found"):
            store.get("goals", "alice-uid", "missing")


class TestPatch:
    """Patch writes only the given fields."""

    def test_untouched_fields_kept(self, store, sample_transaction):
        patched = store.patch("transactions", "alice-uid", sample_transaction["id"], {"description": "Market"})
        assert patched["description"] == "Market"
        assert patched["amount"] == Decimal("50.00")
        assert patched["category_id"] == sample_transaction["category_id"]

    def test_empty_patch_refreshes_updated_at(self, store, sample_transaction):
        patched = store.patch("transactions", "alice-uid", sample_transaction["id"], {})
        assert patched["updated_at"] >= sample_transaction["updated_at"]
        assert patched["created_at"] == sample_transaction["created_at"]

    def test_null_clears(self, store, sample_transaction):
        patched = store.patch("transactions", "alice-uid", sample_transaction["id"], {"category_id": None})
        assert patched["category_id"] is None

    def test_unknown_field_rejected(self, store, sample_transaction):
        with pytest.raises(ValueError):
            store.patch("transactions", "alice-uid", sample_transaction["id"], {"merchant": "x"})


class TestList:
    """Filters, ordering and paging."""

    @pytest.fixture
    def ledger(self, store):
        add_transaction(store, "alice-uid", "10", date(2024, 1, 1), "Coffee beans", "c1")
        add_transaction(store, "alice-uid", "25", date(2024, 1, 10), "Lunch", "c1")
        add_transaction(store, "alice-uid", "300", date(2024, 2, 1), "Paycheck", type=TransactionType.income)
        add_transaction(store, "alice-uid", "40", date(2024, 3, 1), "coffee machine descaler")
        return store

    def test_equals(self, ledger):
        page = ledger.list("transactions", "alice-uid", ListQuery(equals={"category_id": "c1"}))
        assert page.total == 2

    def test_equals_none_matches_null(self, ledger):
        page = ledger.list("transactions", "alice-uid", ListQuery(equals={"category_id": None}))
        assert page.total == 2

    def test_range_is_inclusive(self, ledger):
        page = ledger.list("transactions", "alice-uid", ListQuery(
            ranges=[RangeFilter("date", date(2024, 1, 10), date(2024, 2, 1))],
        ))
        assert sorted(item["description"] for item in page.items) == ["Lunch", "Paycheck"]

    def test_search_is_case_insensitive(self, ledger):
        page = ledger.list("transactions", "alice-uid", ListQuery(search=("description", "COFFEE")))
        assert page.total == 2

    def test_filters_combine(self, ledger):
        page = ledger.list("transactions", "alice-uid", ListQuery(
            equals={"type": TransactionType.expense},
            ranges=[RangeFilter("amount", Decimal("20"), None)],
            search=("description", "n"),
        ))
        assert sorted(item["description"] for item in page.items) == ["Lunch", "coffee machine descaler"]

    def test_paging_reports_total(self, ledger):
        page = ledger.list("transactions", "alice-uid", ListQuery(
            order_by=[("date", True)],
            limit=2,
            offset=1,
        ))
        assert page.total == 4
        assert [item["description"] for item in page.items] == ["Paycheck", "Lunch"]

    def test_unknown_collection(self, store):
        with pytest.raises(ValueError):
            store.list("accounts", "alice-uid")


class TestWriteBatch:
    """Batches apply completely or not at all."""

    def test_missing_id_writes_nothing(self, store, food_category):
        with pytest.raises(NotFound):
            store.write_batch("categories", "alice-uid", deletes=[food_category["id"], "missing"])
        assert store.get("categories", "alice-uid", food_category["id"])["name"] == "Food"

    def test_updates_and_deletes(self, store, food_category):
        other = store.create("categories", "alice-uid", {"name": "Other", "name_lower": "other"})
        store.write_batch(
            "categories", "alice-uid",
            deletes=[food_category["id"]],
            updates={other["id"]: {"icon": "circle"}},
        )
        assert store.get("categories", "alice-uid", other["id"])["icon"] == "circle"
        with pytest.raises(NotFound):
            store.get("categories", "alice-uid", food_category["id"])


class TestUsers:
    """Profile documents keyed by uid."""

    def test_save_is_upsert(self, store):
        assert store.get_user("alice-uid") is None
        created = store.save_user("alice-uid", {"display_name": "Alice", "currency": "EUR", "roles": []})
        updated = store.save_user("alice-uid", {"locale": "de-DE"})
        assert updated["display_name"] == "Alice"
        assert updated["locale"] == "de-DE"
        assert updated["created_at"] == created["created_at"]

    def test_patch_and_delete_missing(self, store):
        with pytest.raises(NotFound):
            store.patch_user("ghost", {"locale": "en"})
        with pytest.raises(NotFound):
            store.delete_user("ghost")
