"""
Category database model.
"""

import enum
import uuid
from sqlalchemy import Column, String, Integer, DateTime, Enum, Index
from moolah.database import Base, utcnow


class CategoryType(str, enum.Enum):
    """Category type enumeration."""
    expense = "expense"
    income = "income"
    transfer = "transfer"


class CategoryStatus(str, enum.Enum):
    """Category status enumeration."""
    active = "active"
    archived = "archived"


class Category(Base):
    """Category model with hierarchical support."""

    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String(128), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    name_lower = Column(String(100), nullable=False)  # Case-folded, for per-owner uniqueness
    type = Column(Enum(CategoryType), default=CategoryType.expense, nullable=False)
    parent_id = Column(String(36), nullable=True)  # Loose reference, may outlive its parent
    sort_order = Column(Integer, default=0, nullable=False)
    status = Column(Enum(CategoryStatus), default=CategoryStatus.active, nullable=False)
    color = Column(String(7), nullable=True)  # Hex color
    icon = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_category_owner_name", "owner_id", "name_lower"),
        Index("idx_category_owner_parent", "owner_id", "parent_id"),
    )
