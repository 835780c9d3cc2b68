"""Field-level checks for caller-supplied values.

Each helper returns the cleaned value or raises ``ValidationError`` naming
the field. Numeric values are rounded half-up to two places first, the
scale of the columns they are stored in.
"""

from decimal import Decimal
from typing import Any, Optional

from arqui_api.exceptions import ValidationError
from arqui_api.services.money import HUNDRED, ZERO, round2, to_decimal


def required_text(value: Any, field: str) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(f"{field} cannot be empty", field=field)
    return text


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip() or None


def _number(value: Any, field: str) -> Decimal:
    number = to_decimal(value)
    if number is None:
        raise ValidationError(f"{field} must be a finite number", field=field)
    return round2(number)


def positive_decimal(value: Any, field: str) -> Decimal:
    number = _number(value, field)
    if number <= ZERO:
        raise ValidationError(f"{field} must be greater than 0", field=field)
    return number


def non_negative_decimal(value: Any, field: str) -> Decimal:
    number = _number(value, field)
    if number < ZERO:
        raise ValidationError(f"{field} must be 0 or greater", field=field)
    return number


def percent(value: Any, field: str) -> Decimal:
    number = _number(value, field)
    if number < ZERO or number > HUNDRED:
        raise ValidationError(f"{field} must be between 0 and 100", field=field)
    return number


def at_least_one(value: Any, field: str) -> int:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer of 1 or greater", field=field)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer of 1 or greater", field=field)
    if number != value or number < 1:
        raise ValidationError(f"{field} must be an integer of 1 or greater", field=field)
    return number


def day_count(value: Any, field: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(f"{field} must be a whole number of days", field=field)
    return value


def currency_code(value: Any, field: str = "currency") -> str:
    code = str(value).strip().upper() if value is not None else ""
    if len(code) != 3 or not code.isalpha():
        raise ValidationError(f"{field} must be a 3-letter currency code", field=field)
    return code


def choice(value: Any, allowed: tuple, field: str) -> str:
    if value not in allowed:
        raise ValidationError(
            f"{field} must be one of: {', '.join(allowed)}", field=field
        )
    return value
