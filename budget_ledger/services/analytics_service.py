# budget_ledger/services/analytics_service.py
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from budget_ledger import schemas
from budget_ledger.core.config import settings
from budget_ledger.core.months import window_bounds
from budget_ledger.services import aggregation
from budget_ledger.services.category_service import CategoryService
from budget_ledger.services.expense_service import ExpenseService
from budget_ledger.services.monthly_budget_service import MonthlyBudgetService

logger = logging.getLogger(__name__)


class AnalyticsService:
    """
    Собирает снимки через сервисы категорий, бюджетов и расходов и передаёт их
    в чистые функции aggregation. Собственного состояния не имеет.
    """

    def __init__(self, db: AsyncSession, owner_id: str):
        self._owner_id = owner_id
        self.categories = CategoryService(db, owner_id)
        self.expenses = ExpenseService(db, owner_id)
        self.budgets = MonthlyBudgetService(db, owner_id)

    async def dashboard(self, month: str) -> schemas.Dashboard:
        view = await self.budgets.get_for_month(month)
        month = view.month
        categories = await self.categories.list()
        expenses = await self.expenses.list_for_month(month)

        summary = aggregation.monthly_summary(month, view.budget, view.items, expenses)
        return schemas.Dashboard(
            month=month,
            has_budget=view.exists,
            summary=summary,
            categories=aggregation.category_statuses(categories, view.items, expenses),
            comparison=aggregation.budget_vs_actual(view.items, expenses),
            spending_breakdown=aggregation.spending_breakdown(summary.total_planned, summary.total_spent),
        )

    async def savings(self, month: str) -> schemas.SavingsReport:
        view = await self.budgets.get_for_month(month)
        expenses = await self.expenses.list_for_month(view.month)
        income = view.budget.income if view.budget is not None else aggregation.ZERO
        return aggregation.savings_report(view.month, income, expenses)

    async def top_categories(self, month: str, limit: Optional[int] = None) -> List[schemas.CategorySpend]:
        categories = await self.categories.list()
        expenses = await self.expenses.list_for_month(month)
        return aggregation.top_categories(categories, expenses, limit=limit)

    async def _expenses_by_month(self, months: List[str]):
        """
        Расходы для всех месяцев окна одним запросом по общему интервалу.
        Либо приходят все месяцы, либо ошибка - частично заполненного ряда не бывает.
        """
        if not months:
            return {}
        start, end = window_bounds(months)
        expenses = await self.expenses.list_between(start, end)
        return aggregation.group_expenses_by_month(expenses)

    async def trend(self, window: Optional[int] = None) -> List[schemas.TrendPoint]:
        if window is None:
            window = settings.TREND_WINDOW_MONTHS
        months = aggregation.trend_window(await self.budgets.list_available_months(), window)
        by_month = await self._expenses_by_month(months)
        logger.debug("Trend for owner %s over %s", self._owner_id, months)
        return aggregation.monthly_trend(months, by_month)

    async def history(self, window: Optional[int] = None) -> List[schemas.HistoricalBreakdownRow]:
        if window is None:
            window = settings.HISTORY_WINDOW_MONTHS
        months = aggregation.trend_window(await self.budgets.list_available_months(), window)
        by_month = await self._expenses_by_month(months)
        return aggregation.historical_breakdown(months, by_month)
