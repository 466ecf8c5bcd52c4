# budget_ledger/services/aggregation.py
"""
Чистые функции аналитики.

Принимают уже загруженные снимки категорий, бюджета, планов и расходов и
возвращают производные представления. Ничего не читают из БД и не хранят состояние,
поэтому их можно тестировать на обычных списках.
Нет категорий или бюджета - результат пустой/нулевой, а не ошибка.
"""
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from budget_ledger import schemas
from budget_ledger.core.config import settings
from budget_ledger.core.months import month_key

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def is_savings_category(name: Optional[str], token: Optional[str] = None) -> bool:
    """
    Категория считается "сбережениями" по соглашению об именах: имя содержит
    SAVINGS_CATEGORY_TOKEN без учёта регистра ("Sparen", "Notgroschen sparen").
    Единственное место, где живёт это правило.
    """
    token = (token or settings.SAVINGS_CATEGORY_TOKEN).lower()
    return bool(name) and token in name.lower()


def sum_amounts(expenses: Iterable) -> Decimal:
    return sum((e.amount for e in expenses), ZERO)


def spent_by_category(expenses: Iterable) -> Dict:
    totals: Dict = defaultdict(lambda: ZERO)
    for expense in expenses:
        totals[expense.category_id] += expense.amount
    return totals


def percent(part: Decimal, whole: Decimal) -> Decimal:
    if whole <= 0:
        return ZERO
    return part / whole * HUNDRED


def status_level(percent_used: Decimal, warning_percent: Optional[int] = None) -> schemas.BudgetStatusLevel:
    if warning_percent is None:
        warning_percent = settings.BUDGET_WARNING_PERCENT
    if percent_used >= HUNDRED:
        return schemas.BudgetStatusLevel.over
    if percent_used >= warning_percent:
        return schemas.BudgetStatusLevel.warning
    return schemas.BudgetStatusLevel.ok


def category_statuses(
    categories: Sequence,
    items: Sequence,
    expenses: Sequence,
    warning_percent: Optional[int] = None,
) -> List[schemas.CategoryStatus]:
    """План, расход и остаток по каждой активной категории."""
    planned_by_category = {item.category_id: item.planned_amount for item in items}
    spent = spent_by_category(expenses)

    statuses = []
    for category in categories:
        if not getattr(category, "is_active", True):
            continue
        planned = planned_by_category.get(category.id, ZERO)
        category_spent = spent.get(category.id, ZERO)
        percent_used = percent(category_spent, planned)
        statuses.append(schemas.CategoryStatus(
            category_id=category.id,
            name=category.name,
            color=category.color,
            planned=planned,
            spent=category_spent,
            remaining=planned - category_spent,
            percent_used=percent_used,
            progress=min(percent_used, HUNDRED),
            status=status_level(percent_used, warning_percent),
        ))
    return statuses


def monthly_summary(month: str, budget, items: Sequence, expenses: Sequence) -> schemas.MonthlySummary:
    income = budget.income if budget is not None else ZERO
    total_planned = sum((item.planned_amount for item in items), ZERO)
    total_spent = sum_amounts(expenses)
    return schemas.MonthlySummary(
        month=month,
        income=income,
        total_planned=total_planned,
        total_spent=total_spent,
        remaining_budget=total_planned - total_spent,
        unplanned=income - total_planned,
    )


def savings_spent(expenses: Iterable, token: Optional[str] = None) -> Decimal:
    # Имя категории берётся из join при чтении, поэтому мягко удалённая
    # сберегательная категория продолжает учитываться
    return sum_amounts(e for e in expenses if is_savings_category(e.category_name, token))


def savings_report(month: str, income: Decimal, expenses: Sequence, token: Optional[str] = None) -> schemas.SavingsReport:
    """
    Спар-рейт: (доход - все расходы + переводы в сбережения) / доход.
    savings_rate может быть отрицательной; savings_rate_display - не ниже 0.
    """
    total_spent = sum_amounts(expenses)
    saved_in_categories = savings_spent(expenses, token)
    leftover = income - total_spent
    total_saved = leftover + saved_in_categories
    rate = percent(total_saved, income) if income > 0 else ZERO
    return schemas.SavingsReport(
        month=month,
        income=income,
        total_spent=total_spent,
        savings_spent=saved_in_categories,
        real_expenses=total_spent - saved_in_categories,
        leftover=leftover,
        total_saved=total_saved,
        savings_rate=rate,
        savings_rate_display=max(rate, ZERO),
    )


def budget_vs_actual(items: Sequence, expenses: Sequence) -> List[schemas.BudgetComparison]:
    """План и факт рядом; строки с нулевым планом не сравниваются."""
    spent = spent_by_category(expenses)
    return [
        schemas.BudgetComparison(
            category_id=item.category_id,
            name=item.category_name,
            color=item.category_color,
            planned=item.planned_amount,
            actual=spent.get(item.category_id, ZERO),
        )
        for item in items
        if item.planned_amount > 0
    ]


def spending_breakdown(total_planned: Decimal, total_spent: Decimal) -> List[schemas.SpendingSlice]:
    """Доли для кругового графика: потрачено / осталось / перерасход."""
    remaining = max(ZERO, total_planned - total_spent)
    overspent = max(ZERO, total_spent - total_planned)

    slices = []
    if overspent > 0:
        # Потраченная часть ограничена планом, остальное - перерасход
        slices.append(schemas.SpendingSlice(label="spent", value=total_planned if total_planned > 0 else total_spent))
        slices.append(schemas.SpendingSlice(label="overspent", value=overspent))
    elif total_spent > 0:
        slices.append(schemas.SpendingSlice(label="spent", value=total_spent))
    if remaining > 0:
        slices.append(schemas.SpendingSlice(label="remaining", value=remaining))
    return slices


def top_categories(
    categories: Sequence,
    expenses: Sequence,
    token: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[schemas.CategorySpend]:
    """Категории с расходами > 0, по убыванию суммы; limit - сколько первых оставить."""
    spent = spent_by_category(expenses)
    rows = [
        schemas.CategorySpend(
            category_id=category.id,
            name=category.name,
            color=category.color,
            amount=spent.get(category.id, ZERO),
            is_savings=is_savings_category(category.name, token),
        )
        for category in categories
    ]
    rows = [row for row in rows if row.amount > 0]
    rows.sort(key=lambda row: row.amount, reverse=True)
    if limit is not None:
        rows = rows[:max(limit, 0)]
    return rows


def total_default_budget(categories: Iterable) -> Decimal:
    return sum((c.default_budget for c in categories), ZERO)


def group_expenses_by_month(expenses: Iterable) -> Dict[str, list]:
    grouped: Dict[str, list] = defaultdict(list)
    for expense in expenses:
        grouped[month_key(expense.expense_date)].append(expense)
    return grouped


def trend_window(available_months: Sequence[str], window: int) -> List[str]:
    """N последних месяцев с бюджетом, от старого к новому (список приходит новыми первыми)."""
    if window <= 0:
        return []
    return list(reversed(list(available_months)[:window]))


def monthly_trend(
    months: Sequence[str],
    expenses_by_month: Mapping[str, Sequence],
    token: Optional[str] = None,
) -> List[schemas.TrendPoint]:
    """Итоги по каждому месяцу окна, независимо друг от друга, в порядке months."""
    points = []
    for month in months:
        expenses = expenses_by_month.get(month, [])
        total = sum_amounts(expenses)
        saved = savings_spent(expenses, token)
        points.append(schemas.TrendPoint(
            month=month,
            total_expenses=total,
            real_expenses=total - saved,
            savings_spent=saved,
        ))
    return points


def historical_breakdown(
    months: Sequence[str],
    expenses_by_month: Mapping[str, Sequence],
) -> List[schemas.HistoricalBreakdownRow]:
    """
    Расходы по категориям за каждый месяц окна.
    Набор ключей (текущие имена категорий, встретившихся в окне) одинаков во всех
    строках: категория без расходов в месяце получает 0. Категории с одинаковым
    именем складываются под одним ключом.
    """
    names: Dict = {}
    for month in months:
        for expense in expenses_by_month.get(month, []):
            names[expense.category_id] = expense.category_name
    keys = sorted(set(names.values()), key=str.lower)

    rows = []
    for month in months:
        amounts = {name: ZERO for name in keys}
        for expense in expenses_by_month.get(month, []):
            amounts[names[expense.category_id]] += expense.amount
        rows.append(schemas.HistoricalBreakdownRow(month=month, amounts=amounts))
    return rows
