"""
User profile schemas.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import ClassVar, List, Optional, Tuple

from moolah.models.user import UserStatus
from moolah.schemas.common import PatchSchema, normalize_currency


class UserSelfUpdate(PatchSchema):
    """Fields a user may change on their own profile. Anything else is rejected."""
    model_config = ConfigDict(extra="forbid")
    non_nullable_fields: ClassVar[Tuple[str, ...]] = ("currency",)

    display_name: Optional[str] = Field(None, max_length=200)
    photo_url: Optional[str] = Field(None, max_length=1024)
    locale: Optional[str] = Field(None, max_length=35)
    timezone: Optional[str] = Field(None, max_length=64)
    currency: Optional[str] = None

    @field_validator("currency")
    @classmethod
    def check_currency(cls, value):
        return normalize_currency(value)


class UserAdminUpdate(UserSelfUpdate):
    """Admin-managed profile update, adds roles and status."""
    non_nullable_fields: ClassVar[Tuple[str, ...]] = ("currency", "roles", "status")

    roles: Optional[List[str]] = None
    status: Optional[UserStatus] = None


class UserResponse(BaseModel):
    id: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = None
    locale: Optional[str] = None
    timezone: Optional[str] = None
    currency: str
    roles: List[str] = []
    status: UserStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
