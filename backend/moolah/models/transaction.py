"""
Transaction database model.
"""

import enum
import uuid
from sqlalchemy import Column, String, DateTime, Date, Numeric, Text, Enum, Index
from moolah.database import Base, utcnow


class TransactionType(str, enum.Enum):
    """Transaction type enumeration."""
    income = "income"
    expense = "expense"


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String(128), nullable=False, index=True)
    type = Column(Enum(TransactionType), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)  # Always positive, direction comes from type
    date = Column(Date, nullable=False)
    description = Column(Text, default="", nullable=False)
    category_id = Column(String(36), nullable=True)  # Loose reference, survives category deletion
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Indexes for common queries
    __table_args__ = (
        Index("idx_transaction_owner_date", "owner_id", "date"),
        Index("idx_transaction_owner_category", "owner_id", "category_id"),
    )
