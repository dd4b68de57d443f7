"""
Database models package.
"""

from moolah.models.budget import Budget
from moolah.models.category import Category, CategoryStatus, CategoryType
from moolah.models.goal import Goal, GoalStatus
from moolah.models.transaction import Transaction, TransactionType
from moolah.models.user import User, UserStatus

__all__ = [
    "Budget",
    "Category",
    "CategoryStatus",
    "CategoryType",
    "Goal",
    "GoalStatus",
    "Transaction",
    "TransactionType",
    "User",
    "UserStatus",
]
