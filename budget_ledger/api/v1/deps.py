# budget_ledger/api/v1/deps.py
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from budget_ledger.db.database import get_async_db # Наша зависимость для получения сессии БД
from budget_ledger.services import (
    AnalyticsService,
    CategoryService,
    ExpenseService,
    MonthlyBudgetService,
)

logger = logging.getLogger(__name__)


async def get_owner_id(
    owner_header: Optional[str] = Header(None, alias="X-Owner-Id")
) -> str:
    """
    Идентификатор владельца от внешнего слоя аутентификации.
    Сама аутентификация вне этого сервиса; без заголовка запрос отклоняется.
    """
    owner_id = (owner_header or "").strip()
    if not owner_id:
        logger.warning("Request rejected: missing X-Owner-Id header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing owner identity",
        )
    return owner_id

# --- Сервисы, привязанные к сессии запроса и владельцу ---

async def get_category_service(
    db: AsyncSession = Depends(get_async_db),
    owner_id: str = Depends(get_owner_id)
) -> CategoryService:
    return CategoryService(db, owner_id)

async def get_expense_service(
    db: AsyncSession = Depends(get_async_db),
    owner_id: str = Depends(get_owner_id)
) -> ExpenseService:
    return ExpenseService(db, owner_id)

async def get_monthly_budget_service(
    db: AsyncSession = Depends(get_async_db),
    owner_id: str = Depends(get_owner_id)
) -> MonthlyBudgetService:
    return MonthlyBudgetService(db, owner_id)

async def get_analytics_service(
    db: AsyncSession = Depends(get_async_db),
    owner_id: str = Depends(get_owner_id)
) -> AnalyticsService:
    return AnalyticsService(db, owner_id)
