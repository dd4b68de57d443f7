"""
Category API endpoints.
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from moolah.dependencies import get_current_user, get_store
from moolah.identity import Identity
from moolah.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryNode,
    CategoryList,
    CategoryTree,
)
from moolah.services import category_service
from moolah.store import RecordStore

router = APIRouter()


@router.get("", response_model=CategoryList)
def list_categories(
    status: str = Query("active", pattern="^(active|archived|all)$"),
    parent_id: Optional[str] = None,
    top_level: bool = False,
    order_by: str = Query("sort_order", pattern="^(sort_order|name)$"),
    sort: str = Query("asc", pattern="^(asc|desc)$"),
    limit: Optional[int] = None,
    offset: int = Query(0, ge=0),
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    """List categories as a flat list. status=all includes archived ones."""
    result = category_service.list_categories(
        store,
        current_user.uid,
        status=None if status == "all" else status,
        parent_id=parent_id,
        top_level=top_level,
        order_by=order_by,
        descending=sort == "desc",
        limit=limit,
        offset=offset,
    )

    return CategoryList(
        items=[CategoryResponse.model_validate(c) for c in result.items],
        total=result.total
    )


@router.get("/tree", response_model=CategoryTree)
def get_category_tree(
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    """All categories nested under their parents."""
    tree = category_service.category_tree(store, current_user.uid)

    def count(nodes):
        return sum(1 + count(node["children"]) for node in nodes)

    return CategoryTree(
        items=[CategoryNode.model_validate(node) for node in tree],
        total=count(tree)
    )


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    category: CategoryCreate,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    """Create a new category."""
    return category_service.create_category(store, current_user.uid, category)


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: str,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    """Get a specific category."""
    return category_service.get_category(store, current_user.uid, category_id)


@router.patch("/{category_id}", response_model=CategoryResponse)
@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    category_update: CategoryUpdate,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    """Update a category. Sending parent_id=null moves it to the top level."""
    return category_service.update_category(store, current_user.uid, category_id, category_update)


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: str,
    cascade: bool = False,
    current_user: Identity = Depends(get_current_user),
    store: RecordStore = Depends(get_store)
):
    """
    Delete a category. A category with children is only deleted with
    cascade=true, which also removes its direct children. Transactions,
    budgets and goals keep their category_id.
    """
    category_service.delete_category(store, current_user.uid, category_id, cascade=cascade)
    return None
