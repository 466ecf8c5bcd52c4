# budget_ledger/crud/crud_expense.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import joinedload
from sqlalchemy import desc
from typing import Optional, List, Dict, Any
from datetime import date
from decimal import Decimal
import uuid

from budget_ledger.crud.base import store_errors
from budget_ledger.db.models.expense import Expense as ExpenseModel

# --- Read Operations ---

async def get_expense(db: AsyncSession, *, owner_id: str, expense_id: uuid.UUID) -> Optional[ExpenseModel]:
    """
    Получить расход по ID.
    Категория загружается сразу (joinedload) - для category_name/category_color.
    """
    stmt = (
        select(ExpenseModel)
        .options(joinedload(ExpenseModel.category))
        .filter(ExpenseModel.id == expense_id, ExpenseModel.owner_id == owner_id)
    )
    with store_errors("loading expense"):
        result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_expenses_between(
    db: AsyncSession,
    *,
    owner_id: str,
    start_date: date,
    end_date: date
) -> List[ExpenseModel]:
    """
    Расходы владельца в полуоткрытом интервале [start_date, end_date), новые первыми.
    Join с категорией (включая неактивные), чтобы отдавать её текущее имя и цвет.
    """
    stmt = (
        select(ExpenseModel)
        .options(joinedload(ExpenseModel.category))
        .filter(
            ExpenseModel.owner_id == owner_id,
            ExpenseModel.expense_date >= start_date,
            ExpenseModel.expense_date < end_date # Строго меньше: первое число следующего месяца не входит
        )
        .order_by(desc(ExpenseModel.expense_date), desc(ExpenseModel.created_at))
    )
    with store_errors("listing expenses"):
        result = await db.execute(stmt)
    return list(result.scalars().all())

# --- Create Operation ---

async def create_expense(
    db: AsyncSession,
    *,
    owner_id: str,
    category_id: uuid.UUID,
    amount: Decimal,
    description: Optional[str],
    expense_date: date
) -> ExpenseModel:
    db_obj = ExpenseModel(
        owner_id=owner_id,
        category_id=category_id,
        amount=amount,
        description=description,
        expense_date=expense_date
    )
    with store_errors("creating expense"):
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj, attribute_names=["category"])
    return db_obj

# --- Update Operation ---

async def update_expense(db: AsyncSession, *, db_obj: ExpenseModel, obj_in: Dict[str, Any]) -> ExpenseModel:
    for field, value in obj_in.items():
        if hasattr(db_obj, field):
            setattr(db_obj, field, value)
    with store_errors("updating expense"):
        db.add(db_obj)
        await db.flush()
        # category_id мог поменяться - перечитываем связь, иначе имя категории будет старым
        await db.refresh(db_obj, attribute_names=["category"])
    return db_obj

# --- Delete Operation ---

async def remove_expense(db: AsyncSession, *, db_obj: ExpenseModel) -> ExpenseModel:
    """Физическое удаление, мягкого удаления у расходов нет."""
    with store_errors("deleting expense"):
        await db.delete(db_obj)
        await db.flush()
    return db_obj
