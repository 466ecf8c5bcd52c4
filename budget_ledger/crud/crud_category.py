# budget_ledger/crud/crud_category.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import update as sqlalchemy_update
from typing import Optional, List, Dict, Any
from decimal import Decimal
import uuid

from budget_ledger.crud.base import store_errors
from budget_ledger.db.models.category import Category as CategoryModel

# --- Read Operations ---

async def get_categories(
    db: AsyncSession,
    *,
    owner_id: str,
    include_inactive: bool = False
) -> List[CategoryModel]:
    """
    Категории владельца в порядке создания (старые первыми).
    По умолчанию только активные - мягко удалённые в списки выбора не попадают.
    """
    stmt = select(CategoryModel).filter(CategoryModel.owner_id == owner_id)
    if not include_inactive:
        stmt = stmt.filter(CategoryModel.is_active.is_(True))
    stmt = stmt.order_by(CategoryModel.created_at.asc())

    with store_errors("listing categories"):
        result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_category(db: AsyncSession, *, owner_id: str, category_id: uuid.UUID) -> Optional[CategoryModel]:
    """Категория по ID (активная или нет), только в пределах владельца."""
    stmt = select(CategoryModel).filter(
        CategoryModel.id == category_id,
        CategoryModel.owner_id == owner_id
    )
    with store_errors("loading category"):
        result = await db.execute(stmt)
    return result.scalar_one_or_none()

# --- Create Operation ---

async def create_category(
    db: AsyncSession,
    *,
    owner_id: str,
    name: str,
    default_budget: Decimal,
    color: str
) -> CategoryModel:
    db_obj = CategoryModel(
        owner_id=owner_id,
        name=name,
        default_budget=default_budget,
        color=color,
        is_active=True
    )
    with store_errors("creating category"):
        db.add(db_obj)
        await db.flush() # Получаем ID до возврата
    return db_obj

# --- Update Operations ---

async def update_category(db: AsyncSession, *, db_obj: CategoryModel, obj_in: Dict[str, Any]) -> CategoryModel:
    for field, value in obj_in.items():
        if hasattr(db_obj, field):
            setattr(db_obj, field, value)
    with store_errors("updating category"):
        db.add(db_obj)
        await db.flush()
    return db_obj


async def deactivate_category(db: AsyncSession, *, owner_id: str, category_id: uuid.UUID) -> bool:
    """Мягкое удаление: is_active = False. Возвращает False, если категория не найдена."""
    stmt = (
        sqlalchemy_update(CategoryModel)
        .where(CategoryModel.id == category_id, CategoryModel.owner_id == owner_id)
        .values(is_active=False)
        .execution_options(synchronize_session="fetch")
    )
    with store_errors("deactivating category"):
        result = await db.execute(stmt)
    return result.rowcount > 0
