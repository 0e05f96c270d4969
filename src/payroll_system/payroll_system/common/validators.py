from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import MAX_MONEY, MAX_YEAR, MIN_YEAR, MONEY_QUANTUM, MONTHS
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required", field=field_name)
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters", field=field_name)
    return value


def parse_money(value: Any, field_name: str) -> Decimal:
    """Coerce a JSON/form number into Decimal.

    Floats go through str() so 0.1 stays 0.1 instead of its binary expansion.
    Returned at cent scale; sub-cent or out-of-column-range input is rejected.
    """

    if value is None or isinstance(value, bool) or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required", field=field_name)
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number", field=field_name)
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number", field=field_name)
    require_money_range(amount, field_name)
    cents = amount.quantize(MONEY_QUANTUM)
    if cents != amount:
        raise ValidationError(f"{field_name} must have at most 2 decimal places", field=field_name)
    return cents


def require_money_range(amount: Decimal, field_name: str) -> Decimal:
    if abs(amount) > MAX_MONEY:
        raise ValidationError(f"{field_name} is out of range", field=field_name)
    return amount


def require_non_negative(value: Any, field_name: str) -> Decimal:
    amount = parse_money(value, field_name)
    if amount < 0:
        raise ValidationError(f"{field_name} must not be negative", field=field_name)
    return amount


def require_positive(value: Any, field_name: str) -> Decimal:
    amount = parse_money(value, field_name)
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than 0", field=field_name)
    return amount


def parse_month(value: Any, field_name: str = "month") -> str:
    """Return the canonical month name (e.g. 'march' -> 'March')."""

    name = require_non_empty(value if isinstance(value, str) else None, field_name)
    for month in MONTHS:
        if month.lower() == name.lower():
            return month
    raise ValidationError(f"{field_name} must be a calendar month name", field=field_name)


def parse_year(value: Any, field_name: str = "year") -> int:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} is required", field=field_name)
    try:
        year = int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be an integer", field=field_name)
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"{field_name} is out of range", field=field_name)
    return year
