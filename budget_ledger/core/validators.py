# budget_ledger/core/validators.py
import re
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from budget_ledger.core.exceptions import ValidationError

AmountLike = Union[Decimal, int, float, str]

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")
_CENT = Decimal("0.01")
# Numeric(12, 2): не больше 10 цифр до запятой
MAX_AMOUNT = Decimal("1e10")


def to_amount(value: AmountLike, field: str = "amount") -> Decimal:
    """Приводит ввод (Decimal/int/float/строка) к Decimal с точностью до цента."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field} must be a number")
    try:
        # float через str, чтобы 0.1 не превращался в 0.1000000000000000055...
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    try:
        amount = amount.quantize(_CENT)
    except InvalidOperation:
        raise ValidationError(f"{field} is too large")
    if abs(amount) >= MAX_AMOUNT:
        raise ValidationError(f"{field} is too large")
    return amount


def non_negative_amount(value: AmountLike, field: str) -> Decimal:
    amount = to_amount(value, field)
    if amount < 0:
        raise ValidationError(f"{field} must not be negative")
    return amount


def positive_amount(value: AmountLike, field: str = "amount") -> Decimal:
    amount = to_amount(value, field)
    if amount <= 0:
        raise ValidationError(f"{field} must be greater than 0")
    return amount


def clean_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Category name cannot be empty")
    return name


def clean_color(color: Optional[str], default: str) -> str:
    """Пустой цвет заменяется стандартным; иначе ожидается #rgb или #rrggbb."""
    color = (color or "").strip()
    if not color:
        return default
    if not _HEX_COLOR.match(color):
        raise ValidationError(f"Invalid color '{color}', expected a hex value like #3b82f6")
    return color


def clean_description(description: Optional[str]) -> Optional[str]:
    description = (description or "").strip()
    return description or None
