"""
Main API router.
"""

from fastapi import APIRouter
from moolah.api import budgets, categories, goals, market, progress, transactions, users

api_router = APIRouter()

api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(transactions.router)
api_router.include_router(budgets.router)
api_router.include_router(goals.router)
api_router.include_router(progress.router)
api_router.include_router(users.router)
api_router.include_router(market.router)
