# budget_ledger/core/months.py
from datetime import date, datetime
from typing import Optional, Tuple

from budget_ledger.core.exceptions import ValidationError

MONTH_FORMAT = "%Y-%m"


def parse_month(month: str) -> date:
    """Возвращает первый день месяца для строки формата YYYY-MM."""
    try:
        return datetime.strptime(month.strip(), MONTH_FORMAT).date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid month '{month}', expected YYYY-MM")


def month_key(day: date) -> str:
    return day.strftime(MONTH_FORMAT)


def current_month(today: Optional[date] = None) -> str:
    return month_key(today or date.today())


def add_months(first_day: date, n: int) -> date:
    """Сдвигает первый день месяца на n месяцев (декабрь + 1 -> январь следующего года)."""
    index = first_day.month - 1 + n
    return date(first_day.year + index // 12, index % 12 + 1, 1)


def shift_month(month: str, n: int) -> str:
    return month_key(add_months(parse_month(month), n))


def month_bounds(month: str) -> Tuple[date, date]:
    """
    Полуоткрытый интервал месяца: [первый день, первый день следующего месяца).
    Правая граница исключается, чтобы первое число следующего месяца не попадало дважды.
    """
    start = parse_month(month)
    return start, add_months(start, 1)


def window_bounds(months) -> Tuple[date, date]:
    """Общий полуоткрытый интервал, покрывающий все переданные месяцы."""
    firsts = [parse_month(m) for m in months]
    return min(firsts), add_months(max(firsts), 1)
