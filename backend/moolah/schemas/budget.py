"""
Budget schemas.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar, Optional, Tuple

from moolah.config import settings
from moolah.schemas.common import InputSchema, PatchSchema, normalize_currency


class BudgetCreate(InputSchema):
    name: str = Field(..., min_length=1, max_length=100)
    amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    currency: str = Field(default_factory=lambda: settings.default_currency)
    category_id: str = Field(..., min_length=1, max_length=36)
    period_start: Optional[date] = None
    period_end: Optional[date] = None

    @field_validator("currency")
    @classmethod
    def check_currency(cls, value):
        return normalize_currency(value)

    @model_validator(mode="after")
    def check_period(self):
        if self.period_start and self.period_end and self.period_end < self.period_start:
            raise ValueError("period_end must not be before period_start")
        return self


class BudgetUpdate(PatchSchema):
    non_nullable_fields: ClassVar[Tuple[str, ...]] = ("name", "amount", "currency", "category_id")

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    currency: Optional[str] = None
    category_id: Optional[str] = Field(None, min_length=1, max_length=36)
    period_start: Optional[date] = None
    period_end: Optional[date] = None

    @field_validator("currency")
    @classmethod
    def check_currency(cls, value):
        return normalize_currency(value)


class BudgetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    amount: Decimal
    currency: str
    category_id: str
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    spent: Decimal
    remaining: Decimal
    created_at: datetime
    updated_at: datetime


class BudgetListResponse(BaseModel):
    items: list[BudgetResponse]
    total: int
    page: int
    per_page: int
    pages: int
