# budget_ledger/schemas/analytics.py
# Производные представления: вычисляются из категорий, планов и расходов, в БД не хранятся.
from pydantic import BaseModel
from typing import Optional, List, Dict
from decimal import Decimal
from enum import Enum
import uuid

ZERO = Decimal("0")

class BudgetStatusLevel(str, Enum):
    ok = "ok"
    warning = "warning" # Потрачено >= BUDGET_WARNING_PERCENT от плана
    over = "over"       # Потрачено >= 100% плана

class CategoryStatus(BaseModel):
    category_id: uuid.UUID
    name: str
    color: Optional[str] = None
    planned: Decimal = ZERO
    spent: Decimal = ZERO
    remaining: Decimal = ZERO # Может быть отрицательным при перерасходе
    percent_used: Decimal = ZERO # Без ограничения сверху, для подписи
    progress: Decimal = ZERO # Ограничено 100, для индикатора
    status: BudgetStatusLevel = BudgetStatusLevel.ok

    @property
    def is_over_budget(self) -> bool:
        return self.remaining < 0

class MonthlySummary(BaseModel):
    month: str
    income: Decimal = ZERO
    total_planned: Decimal = ZERO
    total_spent: Decimal = ZERO
    remaining_budget: Decimal = ZERO # total_planned - total_spent
    unplanned: Decimal = ZERO # income - total_planned, ещё не распределено

class SavingsReport(BaseModel):
    month: str
    income: Decimal = ZERO
    total_spent: Decimal = ZERO
    savings_spent: Decimal = ZERO # Переводы в "сберегательные" категории
    real_expenses: Decimal = ZERO
    leftover: Decimal = ZERO
    total_saved: Decimal = ZERO
    savings_rate: Decimal = ZERO # Может быть отрицательной (диагностика)
    savings_rate_display: Decimal = ZERO # Не ниже 0

class BudgetComparison(BaseModel):
    category_id: uuid.UUID
    name: str
    color: Optional[str] = None
    planned: Decimal
    actual: Decimal

class SpendingSlice(BaseModel):
    label: str # "spent" | "remaining" | "overspent"
    value: Decimal

class CategorySpend(BaseModel):
    category_id: uuid.UUID
    name: str
    color: Optional[str] = None
    amount: Decimal
    is_savings: bool = False

class TrendPoint(BaseModel):
    month: str
    total_expenses: Decimal = ZERO
    real_expenses: Decimal = ZERO
    savings_spent: Decimal = ZERO

class HistoricalBreakdownRow(BaseModel):
    month: str
    # Текущее имя категории -> сумма за месяц; набор ключей одинаков во всех строках ряда
    amounts: Dict[str, Decimal] = {}

class Dashboard(BaseModel):
    month: str
    has_budget: bool
    summary: MonthlySummary
    categories: List[CategoryStatus] = []
    comparison: List[BudgetComparison] = []
    spending_breakdown: List[SpendingSlice] = []
