"""
Starter category tree for new users.
"""

import logging
import sys

from moolah.models.category import CategoryType
from moolah.schemas.category import CategoryCreate
from moolah.services.category_service import fold_name
from moolah.store import ListQuery, RecordStore

logger = logging.getLogger(__name__)

# Default categories with their subcategories
DEFAULT_CATEGORIES = [
    {
        "name": "Income",
        "type": CategoryType.income,
        "color": "#10b981",
        "icon": "dollar-sign",
        "children": [
            {"name": "Salary", "color": "#10b981", "icon": "briefcase"},
            {"name": "Interest", "color": "#10b981", "icon": "percent"},
        ]
    },
    {
        "name": "Housing",
        "color": "#3b82f6",
        "icon": "home",
        "children": [
            {"name": "Rent/Mortgage", "color": "#3b82f6", "icon": "key"},
            {"name": "Utilities", "color": "#3b82f6", "icon": "zap"},
        ]
    },
    {
        "name": "Transportation",
        "color": "#8b5cf6",
        "icon": "car",
        "children": [
            {"name": "Fuel", "color": "#8b5cf6", "icon": "fuel"},
            {"name": "Public Transport", "color": "#8b5cf6", "icon": "train"},
        ]
    },
    {
        "name": "Food",
        "color": "#f59e0b",
        "icon": "utensils",
        "children": [
            {"name": "Groceries", "color": "#f59e0b", "icon": "shopping-cart"},
            {"name": "Restaurants", "color": "#f59e0b", "icon": "utensils-crossed"},
        ]
    },
    {
        "name": "Health",
        "color": "#14b8a6",
        "icon": "heart-pulse",
        "children": []
    },
    {
        "name": "Savings",
        "type": CategoryType.transfer,
        "color": "#64748b",
        "icon": "piggy-bank",
        "children": []
    },
    {
        "name": "Other",
        "color": "#9ca3af",
        "icon": "circle",
        "children": []
    },
]


def seed_record(name, category_type, sort_order, color, icon, parent_id=None) -> dict:
    """Full category record, defaults included, as the API would store it."""
    data = CategoryCreate(
        name=name,
        type=category_type,
        parent_id=parent_id,
        sort_order=sort_order,
        color=color,
        icon=icon,
    )
    return {**data.model_dump(), "name_lower": fold_name(data.name)}


def seed_default_categories(store: RecordStore, owner_id: str) -> int:
    """
    Create the default category tree for an owner who has no categories yet.
    Returns the number of categories created.
    """
    if store.list("categories", owner_id, ListQuery(limit=1)).total > 0:
        return 0

    created = 0
    for sort_order, cat_data in enumerate(DEFAULT_CATEGORIES):
        category_type = cat_data.get("type", CategoryType.expense)
        parent = store.create("categories", owner_id, seed_record(
            cat_data["name"], category_type, sort_order, cat_data["color"], cat_data["icon"],
        ))
        created += 1

        # Subcategories inherit the parent's type
        for child_order, child_data in enumerate(cat_data["children"]):
            store.create("categories", owner_id, seed_record(
                child_data["name"], category_type, child_order, child_data["color"], child_data["icon"],
                parent_id=parent["id"],
            ))
            created += 1

    logger.info(f"Seeded {created} default categories for {owner_id}")
    return created


if __name__ == "__main__":
    from moolah.config import settings
    from moolah.store import build_store

    if len(sys.argv) != 2:
        print("usage: python -m moolah.seed <uid>")
        sys.exit(2)

    store = build_store(settings)
    store.open()
    try:
        count = seed_default_categories(store, sys.argv[1])
        print(f"Seeded {count} categories" if count else "Categories already exist, nothing seeded")
    finally:
        store.close()
