# budget_ledger/db/models/__init__.py
from .category import Category
from .monthly_budget import MonthlyBudget, BudgetItem
from .expense import Expense
