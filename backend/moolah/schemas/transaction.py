"""
Transaction schemas.
"""

import datetime as dt
from pydantic import BaseModel, ConfigDict, Field
from typing import ClassVar, Optional, Tuple
from decimal import Decimal

from moolah.models.transaction import TransactionType
from moolah.schemas.common import InputSchema, PatchSchema


class TransactionCreate(InputSchema):
    type: TransactionType
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    date: dt.date
    description: str = Field("", max_length=500)
    category_id: Optional[str] = Field(None, min_length=1, max_length=36)


class TransactionUpdate(PatchSchema):
    non_nullable_fields: ClassVar[Tuple[str, ...]] = ("type", "amount", "date", "description")

    type: Optional[TransactionType] = None
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    date: Optional[dt.date] = None
    description: Optional[str] = Field(None, max_length=500)
    category_id: Optional[str] = Field(None, min_length=1, max_length=36)


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: TransactionType
    amount: Decimal
    date: dt.date
    description: str
    category_id: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime


class TransactionListResponse(BaseModel):
    items: list[TransactionResponse]
    total: int
    page: int
    per_page: int
    pages: int
