# budget_ledger/api/v1/api.py
from fastapi import APIRouter

from budget_ledger.api.v1.endpoints import categories
from budget_ledger.api.v1.endpoints import expenses
from budget_ledger.api.v1.endpoints import monthly_budgets
from budget_ledger.api.v1.endpoints import analytics

api_router = APIRouter()

api_router.include_router(categories.router, prefix="/categories", tags=["Categories"])
api_router.include_router(expenses.router, prefix="/expenses", tags=["Expenses"])
api_router.include_router(monthly_budgets.router, prefix="/monthly-budgets", tags=["Monthly budgets"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])
