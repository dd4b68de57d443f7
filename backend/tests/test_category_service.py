"""Tests for the category hierarchy rules."""

import pytest
from sqlalchemy.orm import Session

from moolah.errors import DuplicateName, HasChildren, InvalidParent, NotFound
from moolah.schemas.category import CategoryCreate, CategoryUpdate
from moolah.services.category_service import (
    build_category_tree,
    category_tree,
    create_category,
    delete_category,
    fold_name,
    list_categories,
    update_category,
)

OWNER = "alice-uid"


def make(store, name, parent=None, owner=OWNER, **fields):
    data = CategoryCreate(name=name, parent_id=parent["id"] if parent else None, **fields)
    return create_category(store, owner, data)


class TestNames:
    """Names are unique per owner, ignoring case."""

    def test_fold_name(self):
        assert fold_name("  Groceries ") == "groceries"
        assert fold_name("STRASSE") == fold_name("straße")

    def test_duplicate_rejected(self, store):
        make(store, "Food")
        with pytest.raises(DuplicateName):
            make(store, "fOOd")

    def test_same_name_other_owner(self, store):
        make(store, "Food")
        assert make(store, "Food", owner="bob-uid")["name"] == "Food"

    def test_rename_to_own_name_allowed(self, store):
        food = make(store, "Food")
        renamed = update_category(store, OWNER, food["id"], CategoryUpdate(name="FOOD"))
        assert renamed["name"] == "FOOD"
        assert renamed["name_lower"] == "food"

    def test_rename_onto_existing_rejected(self, store):
        make(store, "Food")
        rent = make(store, "Rent")
        with pytest.raises(DuplicateName):
            update_category(store, OWNER, rent["id"], CategoryUpdate(name="food"))


class TestParents:
    """Parents must exist, belong to the owner and not create cycles."""

    def test_missing_parent(self, store):
        with pytest.raises(InvalidParent):
            create_category(store, OWNER, CategoryCreate(name="Snacks", parent_id="missing"))

    def test_other_owners_parent(self, store):
        bobs = make(store, "Food", owner="bob-uid")
        with pytest.raises(InvalidParent):
            make(store, "Snacks", parent=bobs)

    def test_self_parent(self, store):
        food = make(store, "Food")
        with pytest.raises(InvalidParent) as exc_info:
            update_category(store, OWNER, food["id"], CategoryUpdate(parent_id=food["id"]))
        assert exc_info.value.errors == ["parent_id: a category cannot be its own parent"]

    def test_cycle(self, store):
        food = make(store, "Food")
        snacks = make(store, "Snacks", parent=food)
        chips = make(store, "Chips", parent=snacks)
        with pytest.raises(InvalidParent):
            update_category(store, OWNER, food["id"], CategoryUpdate(parent_id=chips["id"]))

    def test_move_to_top_level(self, store):
        food = make(store, "Food")
        snacks = make(store, "Snacks", parent=food)
        moved = update_category(store, OWNER, snacks["id"], CategoryUpdate(parent_id=None))
        assert moved["parent_id"] is None


class TestListing:
    """Status, parent and ordering options."""

    def test_archived_hidden_by_default(self, store):
        make(store, "Food")
        make(store, "Old", status="archived")
        assert [c["name"] for c in list_categories(store, OWNER).items] == ["Food"]
        assert list_categories(store, OWNER, status=None).total == 2
        assert [c["name"] for c in list_categories(store, OWNER, status="archived").items] == ["Old"]

    def test_top_level_and_children(self, store):
        food = make(store, "Food")
        make(store, "Snacks", parent=food)
        make(store, "Rent")
        assert {c["name"] for c in list_categories(store, OWNER, top_level=True).items} == {"Food", "Rent"}
        assert [c["name"] for c in list_categories(store, OWNER, parent_id=food["id"]).items] == ["Snacks"]

    def test_ordering(self, store):
        make(store, "Beta", sort_order=1)
        make(store, "Alpha", sort_order=2)
        make(store, "Gamma", sort_order=0)
        assert [c["name"] for c in list_categories(store, OWNER).items] == ["Gamma", "Beta", "Alpha"]
        assert [c["name"] for c in list_categories(store, OWNER, order_by="name", descending=True).items] == [
            "Gamma", "Beta", "Alpha"
        ]
        assert [c["name"] for c in list_categories(store, OWNER, order_by="name").items] == [
            "Alpha", "Beta", "Gamma"
        ]

    def test_tree(self, store):
        food = make(store, "Food")
        snacks = make(store, "Snacks", parent=food)
        make(store, "Chips", parent=snacks)
        make(store, "Rent", sort_order=1)

        tree = category_tree(store, OWNER)
        assert [node["name"] for node in tree] == ["Food", "Rent"]
        assert tree[0]["children"][0]["name"] == "Snacks"
        assert tree[0]["children"][0]["children"][0]["name"] == "Chips"

    def test_orphan_becomes_root(self):
        tree = build_category_tree([
            {"id": "a", "name": "A", "parent_id": None},
            {"id": "b", "name": "B", "parent_id": "gone"},
        ])
        assert [node["id"] for node in tree] == ["a", "b"]


class TestDelete:
    """Deleting parents requires an explicit cascade."""

    def test_leaf(self, store):
        food = make(store, "Food")
        assert delete_category(store, OWNER, food["id"]) == 1
        with pytest.raises(NotFound):
            store.get("categories", OWNER, food["id"])

    def test_parent_without_cascade(self, store):
        food = make(store, "Food")
        snacks = make(store, "Snacks", parent=food)
        with pytest.raises(HasChildren):
            delete_category(store, OWNER, food["id"])
        assert store.get("categories", OWNER, food["id"])
        assert store.get("categories", OWNER, snacks["id"])

    def test_cascade_removes_children_and_leaves_grandchildren(self, store):
        food = make(store, "Food")
        snacks = make(store, "Snacks", parent=food)
        fruit = make(store, "Fruit", parent=food)
        chips = make(store, "Chips", parent=snacks)
        before = store.get("categories", OWNER, chips["id"])

        assert delete_category(store, OWNER, food["id"], cascade=True) == 3

        remaining = list_categories(store, OWNER).items
        assert [c["id"] for c in remaining] == [chips["id"]]
        assert remaining[0]["parent_id"] == snacks["id"]
        assert remaining[0]["updated_at"] == before["updated_at"]
        for gone in (food, snacks, fruit):
            with pytest.raises(NotFound):
                store.get("categories", OWNER, gone["id"])

        tree = category_tree(store, OWNER)
        assert [node["id"] for node in tree] == [chips["id"]]
        assert tree[0]["children"] == []

    def test_cascade_is_atomic(self, store, monkeypatch):
        food = make(store, "Food")
        snacks = make(store, "Snacks", parent=food)
        chips = make(store, "Chips", parent=snacks)

        original_delete = Session.delete
        calls = []

        def failing_delete(self, instance):
            calls.append(instance.id)
            if len(calls) == 2:
                raise RuntimeError("connection lost")
            return original_delete(self, instance)

        with monkeypatch.context() as m:
            m.setattr(Session, "delete", failing_delete)
            with pytest.raises(RuntimeError):
                delete_category(store, OWNER, food["id"], cascade=True)

        assert store.get("categories", OWNER, food["id"])["name"] == "Food"
        assert store.get("categories", OWNER, snacks["id"])["parent_id"] == food["id"]
        assert store.get("categories", OWNER, chips["id"])["parent_id"] == snacks["id"]

    def test_missing(self, store):
        with pytest.raises(NotFound):
            delete_category(store, OWNER, "missing", cascade=True)
