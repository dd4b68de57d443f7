"""
Savings goal schemas.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, Optional, Tuple

from moolah.config import settings
from moolah.models.goal import GoalStatus
from moolah.schemas.common import InputSchema, PatchSchema, normalize_currency


def check_explicit_status(value: Optional[GoalStatus]) -> Optional[GoalStatus]:
    # completed is derived from the amounts, never set by clients
    if value == GoalStatus.completed:
        raise ValueError("status must be active or archived")
    return value


class GoalCreate(InputSchema):
    title: str = Field(..., min_length=1, max_length=200)
    target_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    current_amount: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    currency: str = Field(default_factory=lambda: settings.default_currency)
    category_id: Optional[str] = Field(None, min_length=1, max_length=36)
    due_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=2000)
    status: GoalStatus = GoalStatus.active

    @field_validator("currency")
    @classmethod
    def check_currency(cls, value):
        return normalize_currency(value)

    @field_validator("status")
    @classmethod
    def check_status(cls, value):
        return check_explicit_status(value)


class GoalUpdate(PatchSchema):
    non_nullable_fields: ClassVar[Tuple[str, ...]] = (
        "title", "target_amount", "current_amount", "currency", "status",
    )

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    target_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    current_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    currency: Optional[str] = None
    category_id: Optional[str] = Field(None, min_length=1, max_length=36)
    due_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=2000)
    status: Optional[GoalStatus] = None

    @field_validator("currency")
    @classmethod
    def check_currency(cls, value):
        return normalize_currency(value)

    @field_validator("status")
    @classmethod
    def check_status(cls, value):
        return check_explicit_status(value)


class GoalResponse(BaseModel):
    """Goal with derived status and progress (percent of target, 0-100)."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    target_amount: Decimal
    current_amount: Decimal
    currency: str
    category_id: Optional[str] = None
    due_date: Optional[date] = None
    notes: Optional[str] = None
    status: GoalStatus
    progress: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class GoalListResponse(BaseModel):
    items: list[GoalResponse]
    total: int
    page: int
    per_page: int
    pages: int
