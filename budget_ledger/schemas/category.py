# budget_ledger/schemas/category.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
import uuid

class CategoryBase(BaseModel):
    name: str = Field(..., max_length=100) # Пустое имя отклоняет сервис (после trim)
    default_budget: Decimal = Decimal("0")
    color: Optional[str] = Field(None, max_length=7) # Без цвета - стандартный синий

class CategoryCreate(CategoryBase):
    pass

class CategoryUpdate(CategoryBase):
    # Обновление полное, как в форме редактирования: имя, бюджет и цвет вместе
    pass

class CategoryInDBBase(CategoryBase):
    id: uuid.UUID
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class Category(CategoryInDBBase):
    pass
