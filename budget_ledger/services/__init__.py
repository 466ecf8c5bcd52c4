# budget_ledger/services/__init__.py
from . import aggregation
from .category_service import CategoryService
from .expense_service import ExpenseService
from .monthly_budget_service import MonthlyBudgetService
from .analytics_service import AnalyticsService
