import uuid
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from budget_ledger.db import models  # noqa: F401  (регистрирует таблицы в Base.metadata)
from budget_ledger.db.base_class import Base
from budget_ledger.services import (
    AnalyticsService,
    CategoryService,
    ExpenseService,
    MonthlyBudgetService,
)

OWNER = "user-1"
OTHER_OWNER = "user-2"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def categories(db):
    return CategoryService(db, OWNER)


@pytest.fixture
def expenses(db):
    return ExpenseService(db, OWNER)


@pytest.fixture
def budgets(db):
    return MonthlyBudgetService(db, OWNER)


@pytest.fixture
def analytics(db):
    return AnalyticsService(db, OWNER)


async def make_category(service, name, default_budget=0, color=None):
    """Создаёт категорию и возвращает её (последнюю в списке по порядку создания)."""
    created = await service.create(name, default_budget, color)
    return created[-1]


# --- Простые снимки для чистых функций агрегации ---

def category(name, color="#3b82f6", default_budget="0", is_active=True):
    return SimpleNamespace(
        id=uuid.uuid4(),
        name=name,
        color=color,
        default_budget=Decimal(default_budget),
        is_active=is_active,
    )


def item(cat, planned):
    return SimpleNamespace(
        category_id=cat.id,
        category_name=cat.name,
        category_color=cat.color,
        planned_amount=Decimal(planned),
    )


def expense(cat, amount, day=date(2025, 5, 10)):
    return SimpleNamespace(
        category_id=cat.id,
        category_name=cat.name,
        category_color=cat.color,
        amount=Decimal(amount),
        expense_date=day,
    )
