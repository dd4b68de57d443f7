"""
Category Pydantic schemas for API validation.
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import ClassVar, Optional, Tuple

from moolah.models.category import CategoryStatus, CategoryType
from moolah.schemas.common import InputSchema, PatchSchema

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class CategoryCreate(InputSchema):
    """Schema for creating a category."""
    name: str = Field(..., min_length=1, max_length=100)
    type: CategoryType = CategoryType.expense
    parent_id: Optional[str] = Field(None, min_length=1, max_length=36)
    sort_order: int = 0
    status: CategoryStatus = CategoryStatus.active
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    icon: Optional[str] = Field(None, max_length=50)


class CategoryUpdate(PatchSchema):
    """Schema for updating a category. parent_id=null moves it to the top level."""
    non_nullable_fields: ClassVar[Tuple[str, ...]] = ("name", "type", "sort_order", "status")

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[CategoryType] = None
    parent_id: Optional[str] = Field(None, min_length=1, max_length=36)
    sort_order: Optional[int] = None
    status: Optional[CategoryStatus] = None
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    icon: Optional[str] = Field(None, max_length=50)


class CategoryResponse(BaseModel):
    """Schema for category response."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    type: CategoryType
    parent_id: Optional[str] = None
    sort_order: int
    status: CategoryStatus
    color: Optional[str] = None
    icon: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CategoryNode(CategoryResponse):
    """Category with its nested children."""
    children: list["CategoryNode"] = []


# Enable forward references for recursive model
CategoryNode.model_rebuild()


class CategoryList(BaseModel):
    """Schema for listing categories."""
    items: list[CategoryResponse]
    total: int


class CategoryTree(BaseModel):
    """Schema for the nested category tree."""
    items: list[CategoryNode]
    total: int
