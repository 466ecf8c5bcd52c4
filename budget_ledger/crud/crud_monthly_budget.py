# budget_ledger/crud/crud_monthly_budget.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import joinedload
from sqlalchemy.exc import IntegrityError
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from typing import Optional, List, Dict, Any
from decimal import Decimal
import uuid

from budget_ledger.core.exceptions import ConflictError
from budget_ledger.crud.base import store_errors
from budget_ledger.db.base_class import utcnow
from budget_ledger.db.models.monthly_budget import MonthlyBudget as MonthlyBudgetModel, BudgetItem as BudgetItemModel

logger = logging.getLogger(__name__)

# Диалекты с INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}

# --- Monthly budgets: read ---

async def get_monthly_budget(db: AsyncSession, *, owner_id: str, budget_id: uuid.UUID) -> Optional[MonthlyBudgetModel]:
    stmt = select(MonthlyBudgetModel).filter(
        MonthlyBudgetModel.id == budget_id,
        MonthlyBudgetModel.owner_id == owner_id
    )
    with store_errors("loading monthly budget"):
        result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_monthly_budget_by_month(db: AsyncSession, *, owner_id: str, month: str) -> Optional[MonthlyBudgetModel]:
    """Бюджет месяца или None (отсутствие бюджета - нормальное состояние, не ошибка)."""
    stmt = select(MonthlyBudgetModel).filter(
        MonthlyBudgetModel.owner_id == owner_id,
        MonthlyBudgetModel.month == month
    )
    with store_errors("loading monthly budget"):
        result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_available_months(db: AsyncSession, *, owner_id: str) -> List[str]:
    """Все месяцы с бюджетом, новые первыми."""
    stmt = (
        select(MonthlyBudgetModel.month)
        .filter(MonthlyBudgetModel.owner_id == owner_id)
        .distinct()
        .order_by(MonthlyBudgetModel.month.desc())
    )
    with store_errors("listing budget months"):
        result = await db.execute(stmt)
    return list(result.scalars().all())

# --- Monthly budgets: write ---

async def create_monthly_budget(db: AsyncSession, *, owner_id: str, month: str, income: Decimal) -> MonthlyBudgetModel:
    db_obj = MonthlyBudgetModel(owner_id=owner_id, month=month, income=income)
    with store_errors("creating monthly budget"):
        db.add(db_obj)
        try:
            await db.flush()
        except IntegrityError as e:
            # Параллельное создание того же месяца: уникальный ключ (owner_id, month)
            await db.rollback()
            raise ConflictError(f"Monthly budget for {month} already exists") from e
    return db_obj


async def update_monthly_budget(db: AsyncSession, *, db_obj: MonthlyBudgetModel, obj_in: Dict[str, Any]) -> MonthlyBudgetModel:
    for field, value in obj_in.items():
        if hasattr(db_obj, field):
            setattr(db_obj, field, value)
    with store_errors("updating monthly budget"):
        db.add(db_obj)
        await db.flush()
    return db_obj

# --- Budget items ---

async def get_budget_items(db: AsyncSession, *, monthly_budget_id: uuid.UUID) -> List[BudgetItemModel]:
    """Планы по категориям для бюджета, с текущим именем/цветом категории."""
    stmt = (
        select(BudgetItemModel)
        .options(joinedload(BudgetItemModel.category))
        .filter(BudgetItemModel.monthly_budget_id == monthly_budget_id)
        .order_by(BudgetItemModel.created_at.asc())
        .execution_options(populate_existing=True) # После upsert через Core объекты в сессии могут быть устаревшими
    )
    with store_errors("listing budget items"):
        result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_budget_item(
    db: AsyncSession,
    *,
    monthly_budget_id: uuid.UUID,
    category_id: uuid.UUID
) -> Optional[BudgetItemModel]:
    stmt = (
        select(BudgetItemModel)
        .options(joinedload(BudgetItemModel.category))
        .filter(
            BudgetItemModel.monthly_budget_id == monthly_budget_id,
            BudgetItemModel.category_id == category_id
        )
        .execution_options(populate_existing=True)
    )
    with store_errors("loading budget item"):
        result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def upsert_budget_item(
    db: AsyncSession,
    *,
    monthly_budget_id: uuid.UUID,
    category_id: uuid.UUID,
    planned_amount: Decimal
) -> BudgetItemModel:
    """
    Вставить или обновить план для пары (бюджет, категория) одним запросом.
    Ключ - уникальный индекс (monthly_budget_id, category_id), поэтому второй вызов
    обновляет строку, а не создаёт дубликат.
    """
    with store_errors("saving budget item"):
        dialect = db.get_bind().dialect.name
        insert_fn = _UPSERT_INSERTS.get(dialect)
        if insert_fn is not None:
            now = utcnow()
            stmt = insert_fn(BudgetItemModel).values(
                id=uuid.uuid4(),
                monthly_budget_id=monthly_budget_id,
                category_id=category_id,
                planned_amount=planned_amount,
                created_at=now,
                updated_at=now
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["monthly_budget_id", "category_id"],
                set_={"planned_amount": stmt.excluded.planned_amount, "updated_at": now}
            )
            await db.execute(stmt)
        else:
            # Диалект без ON CONFLICT: поиск, затем update или insert
            logger.debug("Dialect %s has no native upsert, falling back to lookup", dialect)
            existing = await get_budget_item(db, monthly_budget_id=monthly_budget_id, category_id=category_id)
            if existing:
                existing.planned_amount = planned_amount
                db.add(existing)
            else:
                db.add(BudgetItemModel(
                    monthly_budget_id=monthly_budget_id,
                    category_id=category_id,
                    planned_amount=planned_amount
                ))
            await db.flush()

    return await get_budget_item(db, monthly_budget_id=monthly_budget_id, category_id=category_id)
