from datetime import date
from decimal import Decimal

from budget_ledger.schemas import BudgetStatusLevel

from conftest import make_category


async def test_dashboard_without_budget(analytics, categories):
    await make_category(categories, "Lebensmittel", 400)

    dashboard = await analytics.dashboard("2025-05")

    assert dashboard.month == "2025-05"
    assert dashboard.has_budget is False
    assert dashboard.summary.income == Decimal("0")
    assert dashboard.summary.total_planned == Decimal("0")
    assert dashboard.comparison == []
    assert dashboard.spending_breakdown == []
    assert [s.name for s in dashboard.categories] == ["Lebensmittel"]


async def test_dashboard(analytics, categories, budgets, expenses):
    rent = await make_category(categories, "Miete", 2000)
    food = await make_category(categories, "Lebensmittel", 1200)
    budget = await budgets.create("2025-05", 3500)
    await budgets.apply_default_budgets(budget.id)
    await expenses.create(rent.id, 2000, expense_date=date(2025, 5, 1))
    await expenses.create(food.id, 800, expense_date=date(2025, 5, 12))
    await expenses.create(food.id, 99, expense_date=date(2025, 6, 1))

    dashboard = await analytics.dashboard("2025-05")

    assert dashboard.has_budget
    assert dashboard.summary.total_planned == Decimal("3200")
    assert dashboard.summary.total_spent == Decimal("2800")
    assert dashboard.summary.remaining_budget == Decimal("400")
    assert dashboard.summary.unplanned == Decimal("300")
    statuses = {s.name: s for s in dashboard.categories}
    assert statuses["Miete"].status == BudgetStatusLevel.over
    assert statuses["Lebensmittel"].remaining == Decimal("400")


async def test_savings_uses_budget_income(analytics, categories, budgets, expenses):
    food = await make_category(categories, "Lebensmittel")
    savings = await make_category(categories, "Sparen")
    await budgets.create("2025-05", 3500)
    await expenses.create(food.id, 2500, expense_date=date(2025, 5, 3))
    await expenses.create(savings.id, 500, expense_date=date(2025, 5, 4))

    report = await analytics.savings("2025-05")

    assert report.income == Decimal("3500")
    assert report.real_expenses == Decimal("2500")
    assert report.total_saved == Decimal("1000")
    assert round(report.savings_rate, 2) == Decimal("28.57")


async def test_savings_without_budget(analytics, categories, expenses):
    food = await make_category(categories, "Lebensmittel")
    await expenses.create(food.id, 20, expense_date=date(2025, 5, 3))

    report = await analytics.savings("2025-05")
    assert report.income == Decimal("0")
    assert report.savings_rate == Decimal("0")


async def test_savings_counts_deleted_savings_category(analytics, categories, budgets, expenses):
    savings = await make_category(categories, "Sparen")
    await budgets.create("2025-05", 1000)
    await expenses.create(savings.id, 300, expense_date=date(2025, 5, 3))
    await categories.soft_delete(savings.id)

    report = await analytics.savings("2025-05")
    assert report.savings_spent == Decimal("300")
    assert await analytics.top_categories("2025-05") == []


async def test_top_categories(analytics, categories, expenses):
    food = await make_category(categories, "Lebensmittel")
    fun = await make_category(categories, "Freizeit")
    await make_category(categories, "Kleidung")
    await expenses.create(food.id, 50, expense_date=date(2025, 5, 3))
    await expenses.create(fun.id, 120, expense_date=date(2025, 5, 4))

    rows = await analytics.top_categories("2025-05")
    assert [(r.name, r.amount) for r in rows] == [("Freizeit", Decimal("120")), ("Lebensmittel", Decimal("50"))]


async def test_trend_over_months_with_budget(analytics, categories, budgets, expenses):
    food = await make_category(categories, "Lebensmittel")
    savings = await make_category(categories, "Sparen")
    for month in ("2025-03", "2025-04", "2025-05"):
        await budgets.create(month, 3000)
    await expenses.create(food.id, 100, expense_date=date(2025, 4, 10))
    await expenses.create(savings.id, 50, expense_date=date(2025, 4, 30))
    await expenses.create(food.id, 70, expense_date=date(2025, 5, 1))
    # Месяц без бюджета в ряд не попадает
    await expenses.create(food.id, 999, expense_date=date(2025, 2, 10))

    points = await analytics.trend()

    assert [p.month for p in points] == ["2025-03", "2025-04", "2025-05"]
    assert [p.total_expenses for p in points] == [Decimal("0"), Decimal("150"), Decimal("70")]
    assert points[1].real_expenses == Decimal("100")
    assert points[1].savings_spent == Decimal("50")


async def test_trend_window_limits_months(analytics, budgets):
    for month in ("2025-01", "2025-02", "2025-03"):
        await budgets.create(month, 0)

    points = await analytics.trend(window=2)
    assert [p.month for p in points] == ["2025-02", "2025-03"]


async def test_trend_without_budgets_is_empty(analytics):
    assert await analytics.trend() == []
    assert await analytics.history() == []


async def test_history_keys_are_stable(analytics, categories, budgets, expenses):
    food = await make_category(categories, "Lebensmittel")
    car = await make_category(categories, "Auto")
    await budgets.create("2025-03", 0)
    await budgets.create("2025-04", 0)
    await expenses.create(food.id, 100, expense_date=date(2025, 3, 5))
    await expenses.create(car.id, 60, expense_date=date(2025, 4, 9))
    await categories.update(car.id, "KFZ", 0)

    rows = await analytics.history()

    assert [r.month for r in rows] == ["2025-03", "2025-04"]
    assert rows[0].amounts == {"KFZ": Decimal("0"), "Lebensmittel": Decimal("100")}
    assert rows[1].amounts == {"KFZ": Decimal("60"), "Lebensmittel": Decimal("0")}


async def test_zero_window_is_empty(analytics, budgets):
    await budgets.create("2025-05", 0)

    assert await analytics.trend(window=0) == []
    assert await analytics.history(window=0) == []
    assert [p.month for p in await analytics.trend()] == ["2025-05"]


async def test_top_categories_limit(analytics, categories, expenses):
    for i, name in enumerate(("Miete", "Lebensmittel", "Auto")):
        cat = await make_category(categories, name)
        await expenses.create(cat.id, 100 * (i + 1), expense_date=date(2025, 5, 3))

    rows = await analytics.top_categories("2025-05", limit=2)
    assert [r.name for r in rows] == ["Auto", "Lebensmittel"]
