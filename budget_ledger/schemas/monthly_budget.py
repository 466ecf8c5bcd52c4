# budget_ledger/schemas/monthly_budget.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
import uuid

class MonthlyBudgetBase(BaseModel):
    month: str = Field(..., description="Месяц в формате YYYY-MM")
    income: Decimal = Decimal("0")

class MonthlyBudgetCreate(MonthlyBudgetBase):
    pass

class IncomeUpdate(BaseModel):
    income: Decimal

class BudgetItemSet(BaseModel):
    # Отрицательное значение не ошибка: сервис приводит его к 0
    amount: Decimal

class MonthlyBudgetInDBBase(MonthlyBudgetBase):
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class MonthlyBudget(MonthlyBudgetInDBBase):
    pass

class BudgetItemInDBBase(BaseModel):
    id: uuid.UUID
    monthly_budget_id: uuid.UUID
    category_id: uuid.UUID
    planned_amount: Decimal
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class BudgetItemWithCategory(BudgetItemInDBBase):
    # Текущие имя и цвет категории (join при чтении)
    category_name: str
    category_color: Optional[str] = None

class MonthlyBudgetView(BaseModel):
    """Бюджет месяца вместе с планами по категориям. budget=None - месяц ещё не заведён."""
    month: str
    budget: Optional[MonthlyBudget] = None
    items: List[BudgetItemWithCategory] = []

    @property
    def exists(self) -> bool:
        return self.budget is not None
