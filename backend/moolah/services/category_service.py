"""Category hierarchy rules: parent integrity, per-owner unique names, cascade delete."""

import logging
from typing import Dict, List, Optional

from moolah.config import clamp_page_size
from moolah.errors import DuplicateName, HasChildren, InvalidParent
from moolah.models.category import CategoryStatus
from moolah.schemas.category import CategoryCreate, CategoryUpdate
from moolah.store import ListQuery, Page, Record, RecordStore

logger = logging.getLogger(__name__)

COLLECTION = "categories"


def fold_name(name: str) -> str:
    return name.strip().casefold()


def validate_parent(
    store: RecordStore,
    owner_id: str,
    parent_id: Optional[str],
    self_id: Optional[str] = None,
) -> None:
    """
    Check that ``parent_id`` can be the parent of ``self_id``.

    Rejects self-parenting, parents that do not exist for this owner, and
    parents that sit below ``self_id`` in the tree (which would form a cycle).
    """
    if parent_id is None:
        return
    if self_id is not None and str(parent_id) == str(self_id):
        raise InvalidParent("a category cannot be its own parent")

    by_id = {category["id"]: category for category in store.list(COLLECTION, owner_id).items}
    if parent_id not in by_id:
        raise InvalidParent("parent category does not exist")

    if self_id is None:
        return
    seen = set()
    ancestor = by_id.get(parent_id)
    while ancestor is not None and ancestor["id"] not in seen:
        if ancestor["id"] == self_id:
            raise InvalidParent("parent category is a descendant of this category")
        seen.add(ancestor["id"])
        ancestor = by_id.get(ancestor.get("parent_id"))


def check_name_collision(
    store: RecordStore,
    owner_id: str,
    name_lower: str,
    exclude_id: Optional[str] = None,
) -> None:
    """Raise DuplicateName if another of the owner's categories has this folded name."""
    matches = store.list(COLLECTION, owner_id, ListQuery(equals={"name_lower": name_lower})).items
    if any(match["id"] != exclude_id for match in matches):
        raise DuplicateName()


def list_categories(
    store: RecordStore,
    owner_id: str,
    status: Optional[str] = CategoryStatus.active.value,
    parent_id: Optional[str] = None,
    top_level: bool = False,
    order_by: str = "sort_order",
    descending: bool = False,
    limit: Optional[int] = None,
    offset: int = 0,
) -> Page:
    """List categories. status=None returns every status."""
    equals = {}
    if status:
        equals["status"] = status
    if top_level:
        equals["parent_id"] = None
    elif parent_id is not None:
        equals["parent_id"] = parent_id

    order_field = "name" if order_by == "name" else "sort_order"
    order = [(order_field, descending)]
    if order_field != "name":
        order.append(("name", False))

    return store.list(COLLECTION, owner_id, ListQuery(
        equals=equals,
        order_by=order,
        limit=clamp_page_size(limit),
        offset=offset,
    ))


def build_category_tree(categories: List[Record]) -> List[Dict]:
    """Nest a flat category list by parent_id. Nodes whose parent is missing become roots."""
    nodes = {category["id"]: {**category, "children": []} for category in categories}

    roots = []
    for node in nodes.values():
        parent = nodes.get(node.get("parent_id"))
        if parent is not None and parent is not node:
            parent["children"].append(node)
        else:
            roots.append(node)

    return roots


def category_tree(store: RecordStore, owner_id: str) -> List[Dict]:
    categories = store.list(COLLECTION, owner_id, ListQuery(
        order_by=[("sort_order", False), ("name", False)],
    )).items
    return build_category_tree(categories)


def get_category(store: RecordStore, owner_id: str, category_id: str) -> Record:
    return store.get(COLLECTION, owner_id, category_id)


def create_category(store: RecordStore, owner_id: str, data: CategoryCreate) -> Record:
    name_lower = fold_name(data.name)
    check_name_collision(store, owner_id, name_lower)
    validate_parent(store, owner_id, data.parent_id)

    return store.create(COLLECTION, owner_id, {
        **data.model_dump(),
        "name_lower": name_lower,
    })


def update_category(store: RecordStore, owner_id: str, category_id: str, update: CategoryUpdate) -> Record:
    store.get(COLLECTION, owner_id, category_id)

    changes = update.changes()
    if "name" in changes:
        changes["name_lower"] = fold_name(changes["name"])
        check_name_collision(store, owner_id, changes["name_lower"], exclude_id=category_id)
    if changes.get("parent_id") is not None:
        validate_parent(store, owner_id, changes["parent_id"], self_id=category_id)

    return store.patch(COLLECTION, owner_id, category_id, changes)


def delete_category(store: RecordStore, owner_id: str, category_id: str, cascade: bool = False) -> int:
    """
    Delete a category. Returns how many categories were removed.

    With children and no cascade, raises HasChildren and changes nothing.
    With cascade, the category and its direct children go in one atomic
    batch. Grandchildren are left as they are, still pointing at the
    deleted child; the tree shows them as roots.
    """
    store.get(COLLECTION, owner_id, category_id)

    children = store.list(COLLECTION, owner_id, ListQuery(equals={"parent_id": category_id})).items
    if not children:
        store.delete(COLLECTION, owner_id, category_id)
        return 1
    if not cascade:
        raise HasChildren()

    child_ids = [child["id"] for child in children]
    store.write_batch(COLLECTION, owner_id, deletes=child_ids + [category_id])
    logger.info(f"Deleted category {category_id} with {len(child_ids)} children")
    return len(child_ids) + 1
