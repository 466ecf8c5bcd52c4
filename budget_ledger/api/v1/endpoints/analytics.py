# budget_ledger/api/v1/endpoints/analytics.py
from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from budget_ledger import schemas
from budget_ledger.api.v1 import deps
from budget_ledger.core.months import current_month
from budget_ledger.services import AnalyticsService

router = APIRouter()


@router.get("/dashboard", response_model=schemas.Dashboard)
async def read_dashboard(
    month: Optional[str] = Query(None, description="YYYY-MM, по умолчанию текущий месяц"),
    service: AnalyticsService = Depends(deps.get_analytics_service)
):
    return await service.dashboard(month or current_month())


@router.get("/savings", response_model=schemas.SavingsReport)
async def read_savings(
    month: Optional[str] = Query(None),
    service: AnalyticsService = Depends(deps.get_analytics_service)
):
    return await service.savings(month or current_month())


@router.get("/top-categories", response_model=List[schemas.CategorySpend])
async def read_top_categories(
    month: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1, description="Сколько категорий вернуть, например 4 для виджета"),
    service: AnalyticsService = Depends(deps.get_analytics_service)
):
    return await service.top_categories(month or current_month(), limit)


@router.get("/trend", response_model=List[schemas.TrendPoint])
async def read_trend(
    window: Optional[int] = Query(None, ge=1, le=60, description="Сколько последних месяцев, по умолчанию TREND_WINDOW_MONTHS"),
    service: AnalyticsService = Depends(deps.get_analytics_service)
):
    """Итоги по месяцам, от старого к новому."""
    return await service.trend(window)


@router.get("/history", response_model=List[schemas.HistoricalBreakdownRow])
async def read_history(
    window: Optional[int] = Query(None, ge=1, le=60),
    service: AnalyticsService = Depends(deps.get_analytics_service)
):
    return await service.history(window)
