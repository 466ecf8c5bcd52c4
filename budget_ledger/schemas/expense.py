# budget_ledger/schemas/expense.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime, date
from decimal import Decimal
import uuid

class ExpenseBase(BaseModel):
    category_id: uuid.UUID
    amount: Decimal # > 0, проверяется сервисом
    description: Optional[str] = Field(None, max_length=500)
    expense_date: Optional[date] = None # Без даты - сегодняшний день

class ExpenseCreate(ExpenseBase):
    pass

class ExpenseUpdate(ExpenseBase):
    pass

class ExpenseInDBBase(BaseModel):
    id: uuid.UUID
    category_id: uuid.UUID
    amount: Decimal
    description: Optional[str] = None
    expense_date: date
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ExpenseWithCategory(ExpenseInDBBase):
    # Имя и цвет берутся из категории в момент чтения, а не копируются при создании
    category_name: str
    category_color: Optional[str] = None

class ExpenseMonthList(BaseModel):
    month: str
    expenses: List[ExpenseWithCategory]
    total: Decimal
