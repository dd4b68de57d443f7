"""
User profile database model.
"""

import enum
from sqlalchemy import Column, String, DateTime, JSON, Enum
from moolah.database import Base, utcnow


class UserStatus(str, enum.Enum):
    """User status enumeration."""
    active = "active"
    disabled = "disabled"
    deleted = "deleted"


class User(Base):
    """User profile, keyed by the identity provider's uid."""

    __tablename__ = "users"

    id = Column(String(128), primary_key=True)
    display_name = Column(String(200), nullable=True)
    email = Column(String(320), nullable=True)
    photo_url = Column(String(1024), nullable=True)
    locale = Column(String(35), nullable=True)
    timezone = Column(String(64), nullable=True)
    currency = Column(String(3), nullable=False)
    roles = Column(JSON, default=list, nullable=False)
    status = Column(Enum(UserStatus), default=UserStatus.active, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
