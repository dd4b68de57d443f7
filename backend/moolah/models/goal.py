"""
Savings goal database model.
"""

import enum
import uuid
from sqlalchemy import Column, String, DateTime, Date, Numeric, Text, Enum
from moolah.database import Base, utcnow


class GoalStatus(str, enum.Enum):
    """Goal status as reported to clients. Only active/archived are ever stored."""
    active = "active"
    completed = "completed"
    archived = "archived"


class Goal(Base):
    """Savings goal model."""

    __tablename__ = "goals"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String(128), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    target_amount = Column(Numeric(12, 2), nullable=False)
    current_amount = Column(Numeric(12, 2), default=0, nullable=False)
    currency = Column(String(3), nullable=False)
    category_id = Column(String(36), nullable=True)
    due_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(Enum(GoalStatus), default=GoalStatus.active, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
