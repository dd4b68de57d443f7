"""
Pydantic schemas package.
"""

from moolah.schemas.budget import (
    BudgetCreate,
    BudgetUpdate,
    BudgetResponse,
    BudgetListResponse,
)
from moolah.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryNode,
    CategoryList,
    CategoryTree,
)
from moolah.schemas.goal import (
    GoalCreate,
    GoalUpdate,
    GoalResponse,
    GoalListResponse,
)
from moolah.schemas.transaction import (
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
)
from moolah.schemas.user import (
    UserSelfUpdate,
    UserAdminUpdate,
    UserResponse,
)

__all__ = [
    "BudgetCreate",
    "BudgetUpdate",
    "BudgetResponse",
    "BudgetListResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryNode",
    "CategoryList",
    "CategoryTree",
    "GoalCreate",
    "GoalUpdate",
    "GoalResponse",
    "GoalListResponse",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionResponse",
    "TransactionListResponse",
    "UserSelfUpdate",
    "UserAdminUpdate",
    "UserResponse",
]
