# budget_ledger/services/expense_service.py
import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from budget_ledger import crud, schemas
from budget_ledger.core.exceptions import NotFoundError
from budget_ledger.core.months import current_month, month_bounds, month_key, parse_month
from budget_ledger.core.validators import AmountLike, clean_description, positive_amount

logger = logging.getLogger(__name__)


class ExpenseService:
    """Расходы одного владельца. После каждой записи перечитывается список месяца."""

    def __init__(self, db: AsyncSession, owner_id: str):
        self._db = db
        self._owner_id = owner_id

    async def list_for_month(self, month: str) -> List[schemas.ExpenseWithCategory]:
        start, end = month_bounds(month)
        return await self.list_between(start, end)

    async def list_between(self, start: date, end: date) -> List[schemas.ExpenseWithCategory]:
        """Расходы в [start, end), новые первыми, с текущими именем и цветом категории."""
        expenses = await crud.crud_expense.get_expenses_between(
            self._db, owner_id=self._owner_id, start_date=start, end_date=end
        )
        return [schemas.ExpenseWithCategory.model_validate(e) for e in expenses]

    async def month_list(self, month: str) -> schemas.ExpenseMonthList:
        month = month_key(parse_month(month))
        expenses = await self.list_for_month(month)
        return schemas.ExpenseMonthList(
            month=month,
            expenses=expenses,
            total=sum((e.amount for e in expenses), Decimal("0")),
        )

    async def get(self, expense_id: uuid.UUID) -> schemas.ExpenseWithCategory:
        expense = await crud.crud_expense.get_expense(
            self._db, owner_id=self._owner_id, expense_id=expense_id
        )
        if expense is None:
            raise NotFoundError("Expense", expense_id)
        return schemas.ExpenseWithCategory.model_validate(expense)

    async def _ensure_category(self, category_id: uuid.UUID) -> None:
        category = await crud.crud_category.get_category(
            self._db, owner_id=self._owner_id, category_id=category_id
        )
        if category is None:
            raise NotFoundError("Category", category_id)

    async def create(
        self,
        category_id: uuid.UUID,
        amount: AmountLike,
        description: Optional[str] = None,
        expense_date: Optional[date] = None,
    ) -> List[schemas.ExpenseWithCategory]:
        amount = positive_amount(amount)
        expense_date = expense_date or date.today()
        await self._ensure_category(category_id)

        expense = await crud.crud_expense.create_expense(
            self._db,
            owner_id=self._owner_id,
            category_id=category_id,
            amount=amount,
            description=clean_description(description),
            expense_date=expense_date,
        )
        logger.info("Expense %s (%s on %s) created for owner %s", expense.id, amount, expense_date, self._owner_id)
        # Перечитываем месяц самого расхода, а не текущий
        return await self.list_for_month(month_key(expense_date))

    async def update(
        self,
        expense_id: uuid.UUID,
        category_id: uuid.UUID,
        amount: AmountLike,
        description: Optional[str] = None,
        expense_date: Optional[date] = None,
    ) -> List[schemas.ExpenseWithCategory]:
        amount = positive_amount(amount)
        expense_date = expense_date or date.today()

        expense = await crud.crud_expense.get_expense(
            self._db, owner_id=self._owner_id, expense_id=expense_id
        )
        if expense is None:
            raise NotFoundError("Expense", expense_id)
        await self._ensure_category(category_id)

        await crud.crud_expense.update_expense(
            self._db,
            db_obj=expense,
            obj_in={
                "category_id": category_id,
                "amount": amount,
                "description": clean_description(description),
                "expense_date": expense_date,
            },
        )
        logger.info("Expense %s updated for owner %s", expense_id, self._owner_id)
        return await self.list_for_month(month_key(expense_date))

    async def delete(self, expense_id: uuid.UUID, month: Optional[str] = None) -> List[schemas.ExpenseWithCategory]:
        """Физическое удаление; возвращает список за month (по умолчанию - текущий месяц)."""
        expense = await crud.crud_expense.get_expense(
            self._db, owner_id=self._owner_id, expense_id=expense_id
        )
        if expense is None:
            raise NotFoundError("Expense", expense_id)

        await crud.crud_expense.remove_expense(self._db, db_obj=expense)
        logger.info("Expense %s deleted for owner %s", expense_id, self._owner_id)
        return await self.list_for_month(month or current_month())
