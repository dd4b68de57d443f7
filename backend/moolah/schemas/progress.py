"""
Progress summary schemas.
"""

from pydantic import BaseModel
from datetime import date
from typing import List, Optional

from moolah.models.goal import GoalStatus


class CategoryTotal(BaseModel):
    category_id: str
    category_name: str
    amount: float
    percent: float


class BudgetProgress(BaseModel):
    id: str
    name: str
    currency: str
    amount: float
    spent: float
    remaining: float
    percent_used: Optional[float] = None


class GoalProgress(BaseModel):
    id: str
    title: str
    currency: str
    target_amount: float
    current_amount: float
    remaining: float
    progress: Optional[int] = None
    status: GoalStatus


class ProgressSummary(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_income: float
    total_expenses: float
    net: float
    by_category: List[CategoryTotal]
    budgets: List[BudgetProgress]
    goals: List[GoalProgress]
