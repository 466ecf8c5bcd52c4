# budget_ledger/api/v1/endpoints/monthly_budgets.py
from fastapi import APIRouter, Depends, Query, status
from typing import List
import uuid

from budget_ledger import schemas
from budget_ledger.api.v1 import deps
from budget_ledger.services import MonthlyBudgetService

router = APIRouter()


@router.get("/months", response_model=List[str])
async def read_available_months(
    include_current: bool = Query(False, description="Добавить текущий месяц, даже если бюджета нет"),
    service: MonthlyBudgetService = Depends(deps.get_monthly_budget_service)
):
    """Месяцы с бюджетом, новые первыми."""
    if include_current:
        return await service.list_selectable_months()
    return await service.list_available_months()


@router.get("/default-month", response_model=str)
async def read_default_month(service: MonthlyBudgetService = Depends(deps.get_monthly_budget_service)):
    return await service.default_month()


@router.get("/{month}", response_model=schemas.MonthlyBudgetView)
async def read_monthly_budget(
    month: str,
    service: MonthlyBudgetService = Depends(deps.get_monthly_budget_service)
):
    """Бюджет месяца с планами. Если бюджета нет - budget: null, а не 404."""
    return await service.get_for_month(month)


@router.post("/", response_model=schemas.MonthlyBudget, status_code=status.HTTP_201_CREATED)
async def create_monthly_budget(
    *,
    budget_in: schemas.MonthlyBudgetCreate,
    get_or_create: bool = Query(False, description="Вернуть существующий бюджет вместо 409"),
    service: MonthlyBudgetService = Depends(deps.get_monthly_budget_service)
):
    if get_or_create:
        return await service.get_or_create(budget_in.month, budget_in.income)
    return await service.create(budget_in.month, budget_in.income)


@router.put("/{budget_id}/income", response_model=schemas.MonthlyBudget)
async def update_income(
    *,
    budget_id: uuid.UUID,
    income_in: schemas.IncomeUpdate,
    service: MonthlyBudgetService = Depends(deps.get_monthly_budget_service)
):
    return await service.update_income(budget_id, income_in.income)


@router.put("/{budget_id}/items/{category_id}", response_model=schemas.MonthlyBudgetView)
async def set_budget_for_category(
    *,
    budget_id: uuid.UUID,
    category_id: uuid.UUID,
    item_in: schemas.BudgetItemSet,
    service: MonthlyBudgetService = Depends(deps.get_monthly_budget_service)
):
    """Upsert плана категории: повторный вызов обновляет, а не дублирует."""
    return await service.set_budget_for_category(budget_id, category_id, item_in.amount)


@router.post("/{budget_id}/apply-defaults", response_model=schemas.MonthlyBudgetView)
async def apply_default_budgets(
    budget_id: uuid.UUID,
    service: MonthlyBudgetService = Depends(deps.get_monthly_budget_service)
):
    """Заполнить пустые планы стандартными бюджетами категорий."""
    return await service.apply_default_budgets(budget_id)
