"""
Budget database model.
"""

import uuid
from sqlalchemy import Column, String, DateTime, Date, Numeric, Index
from moolah.database import Base, utcnow


class Budget(Base):
    """Spending ceiling for one category. Spent and remaining are derived on read."""

    __tablename__ = "budgets"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String(128), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    category_id = Column(String(36), nullable=False)
    period_start = Column(Date, nullable=True)
    period_end = Column(Date, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_budget_owner_category", "owner_id", "category_id"),
    )
