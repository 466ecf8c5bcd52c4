# budget_ledger/schemas/__init__.py
from .category import Category, CategoryCreate, CategoryUpdate
from .monthly_budget import (
    MonthlyBudget,
    MonthlyBudgetCreate,
    IncomeUpdate,
    BudgetItemSet,
    BudgetItemWithCategory,
    MonthlyBudgetView,
)
from .expense import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseWithCategory,
    ExpenseMonthList,
)
from .analytics import (
    BudgetStatusLevel,
    CategoryStatus,
    MonthlySummary,
    SavingsReport,
    BudgetComparison,
    SpendingSlice,
    CategorySpend,
    TrendPoint,
    HistoricalBreakdownRow,
    Dashboard,
)
