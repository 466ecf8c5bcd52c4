# budget_ledger/services/monthly_budget_service.py
import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from budget_ledger import crud, schemas
from budget_ledger.core.exceptions import ConflictError, NotFoundError
from budget_ledger.core.months import current_month, month_key, parse_month
from budget_ledger.core.validators import AmountLike, non_negative_amount, to_amount

logger = logging.getLogger(__name__)


def _normalize_month(month: str) -> str:
    # "2025-6" -> "2025-06"; некорректный формат -> ValidationError
    return month_key(parse_month(month))


class MonthlyBudgetService:
    """
    Бюджет месяца (доход) и планы по категориям.
    Для пары (владелец, месяц) есть только два состояния: бюджета нет / бюджет заведён.
    """

    def __init__(self, db: AsyncSession, owner_id: str):
        self._db = db
        self._owner_id = owner_id

    async def _get_budget(self, budget_id: uuid.UUID):
        budget = await crud.crud_monthly_budget.get_monthly_budget(
            self._db, owner_id=self._owner_id, budget_id=budget_id
        )
        if budget is None:
            raise NotFoundError("Monthly budget", budget_id)
        return budget

    async def _view(self, month: str, budget) -> schemas.MonthlyBudgetView:
        if budget is None:
            return schemas.MonthlyBudgetView(month=month, budget=None, items=[])
        items = await crud.crud_monthly_budget.get_budget_items(self._db, monthly_budget_id=budget.id)
        return schemas.MonthlyBudgetView(
            month=month,
            budget=schemas.MonthlyBudget.model_validate(budget),
            items=[schemas.BudgetItemWithCategory.model_validate(i) for i in items],
        )

    async def get_for_month(self, month: str) -> schemas.MonthlyBudgetView:
        """Бюджет месяца с планами. Если бюджета нет - пустой view, а не ошибка."""
        month = _normalize_month(month)
        budget = await crud.crud_monthly_budget.get_monthly_budget_by_month(
            self._db, owner_id=self._owner_id, month=month
        )
        return await self._view(month, budget)

    async def create(self, month: str, income: AmountLike = 0) -> schemas.MonthlyBudget:
        month = _normalize_month(month)
        income = non_negative_amount(income, "income")

        existing = await crud.crud_monthly_budget.get_monthly_budget_by_month(
            self._db, owner_id=self._owner_id, month=month
        )
        if existing is not None:
            raise ConflictError(f"Monthly budget for {month} already exists")

        budget = await crud.crud_monthly_budget.create_monthly_budget(
            self._db, owner_id=self._owner_id, month=month, income=income
        )
        logger.info("Monthly budget %s created for owner %s (income %s)", month, self._owner_id, income)
        return schemas.MonthlyBudget.model_validate(budget)

    async def get_or_create(self, month: str, income: AmountLike = 0) -> schemas.MonthlyBudget:
        """Идемпотентный вариант create: существующий бюджет возвращается как есть."""
        month = _normalize_month(month)
        income = non_negative_amount(income, "income")
        existing = await crud.crud_monthly_budget.get_monthly_budget_by_month(
            self._db, owner_id=self._owner_id, month=month
        )
        if existing is not None:
            return schemas.MonthlyBudget.model_validate(existing)
        return await self.create(month, income)

    async def update_income(self, budget_id: uuid.UUID, income: AmountLike) -> schemas.MonthlyBudget:
        """Меняет только доход; планы по категориям от дохода не зависят."""
        income = non_negative_amount(income, "income")
        budget = await self._get_budget(budget_id)
        budget = await crud.crud_monthly_budget.update_monthly_budget(
            self._db, db_obj=budget, obj_in={"income": income}
        )
        logger.info("Income of budget %s set to %s for owner %s", budget_id, income, self._owner_id)
        return schemas.MonthlyBudget.model_validate(budget)

    async def set_budget_for_category(
        self,
        budget_id: uuid.UUID,
        category_id: uuid.UUID,
        amount: AmountLike,
    ) -> schemas.MonthlyBudgetView:
        """
        Upsert плана для категории. Отрицательная сумма приводится к 0
        (поле ввода в UI может быть временно пустым или некорректным).
        """
        planned = to_amount(amount, "amount")
        if planned < 0:
            planned = Decimal("0.00")

        budget = await self._get_budget(budget_id)
        category = await crud.crud_category.get_category(
            self._db, owner_id=self._owner_id, category_id=category_id
        )
        if category is None:
            raise NotFoundError("Category", category_id)

        await crud.crud_monthly_budget.upsert_budget_item(
            self._db, monthly_budget_id=budget.id, category_id=category_id, planned_amount=planned
        )
        logger.info("Planned %s for category %s in %s (owner %s)", planned, category_id, budget.month, self._owner_id)
        return await self._view(budget.month, budget)

    async def apply_default_budgets(self, budget_id: uuid.UUID) -> schemas.MonthlyBudgetView:
        """
        Заполняет план стандартным бюджетом категории для всех активных категорий,
        у которых ещё нет строки плана. Уже заданные планы не меняются.
        """
        budget = await self._get_budget(budget_id)
        categories = await crud.crud_category.get_categories(self._db, owner_id=self._owner_id)
        items = await crud.crud_monthly_budget.get_budget_items(self._db, monthly_budget_id=budget.id)
        planned_ids = {item.category_id for item in items}

        added = 0
        for category in categories:
            if category.id in planned_ids:
                continue
            await crud.crud_monthly_budget.upsert_budget_item(
                self._db,
                monthly_budget_id=budget.id,
                category_id=category.id,
                planned_amount=category.default_budget,
            )
            added += 1
        logger.info("Applied %d default budgets to %s for owner %s", added, budget.month, self._owner_id)
        return await self._view(budget.month, budget)

    async def list_available_months(self) -> List[str]:
        return await crud.crud_monthly_budget.get_available_months(self._db, owner_id=self._owner_id)

    async def list_selectable_months(self, today: Optional[date] = None) -> List[str]:
        """Месяцы с бюджетом плюс текущий (даже если он ещё не заведён), новые первыми."""
        months = set(await self.list_available_months())
        months.add(current_month(today))
        return sorted(months, reverse=True)

    async def default_month(self, today: Optional[date] = None) -> str:
        """Текущий месяц, если он заведён; иначе самый свежий заведённый; иначе текущий."""
        this_month = current_month(today)
        months = await self.list_available_months()
        if this_month in months or not months:
            return this_month
        return months[0]
