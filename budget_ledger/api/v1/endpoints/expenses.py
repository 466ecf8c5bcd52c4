# budget_ledger/api/v1/endpoints/expenses.py
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
import uuid

from budget_ledger import schemas
from budget_ledger.api.v1 import deps
from budget_ledger.core.months import current_month
from budget_ledger.services import ExpenseService

router = APIRouter()


@router.get("/", response_model=schemas.ExpenseMonthList)
async def read_expenses(
    month: Optional[str] = Query(None, description="YYYY-MM, по умолчанию текущий месяц"),
    service: ExpenseService = Depends(deps.get_expense_service)
):
    """Расходы месяца (новые первыми) с текущими именем и цветом категории."""
    return await service.month_list(month or current_month())


@router.post("/", response_model=List[schemas.ExpenseWithCategory], status_code=status.HTTP_201_CREATED)
async def create_expense(
    *,
    expense_in: schemas.ExpenseCreate,
    service: ExpenseService = Depends(deps.get_expense_service)
):
    """Создать расход; в ответе - список за месяц этого расхода."""
    return await service.create(
        expense_in.category_id,
        expense_in.amount,
        expense_in.description,
        expense_in.expense_date,
    )


@router.get("/{expense_id}", response_model=schemas.ExpenseWithCategory)
async def read_expense(
    expense_id: uuid.UUID,
    service: ExpenseService = Depends(deps.get_expense_service)
):
    return await service.get(expense_id)


@router.put("/{expense_id}", response_model=List[schemas.ExpenseWithCategory])
async def update_expense(
    *,
    expense_id: uuid.UUID,
    expense_in: schemas.ExpenseUpdate,
    service: ExpenseService = Depends(deps.get_expense_service)
):
    return await service.update(
        expense_id,
        expense_in.category_id,
        expense_in.amount,
        expense_in.description,
        expense_in.expense_date,
    )


@router.delete("/{expense_id}", response_model=List[schemas.ExpenseWithCategory])
async def delete_expense(
    expense_id: uuid.UUID,
    month: Optional[str] = Query(None, description="Месяц списка в ответе, по умолчанию текущий"),
    service: ExpenseService = Depends(deps.get_expense_service)
):
    return await service.delete(expense_id, month)
