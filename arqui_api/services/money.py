"""Decimal helpers shared by the pricing code.

All money, area and rate figures are ``decimal.Decimal`` rounded half-up to
two places.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")


def to_decimal(value: Any, default: Optional[Decimal] = None) -> Optional[Decimal]:
    """Coerce ``value`` to a finite Decimal, or return ``default``.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather
    than its binary expansion. Booleans are rejected.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return default
    if not result.is_finite():
        return default
    return result


def round2(value: Any) -> Decimal:
    """Round half-up to two decimal places."""
    amount = to_decimal(value, ZERO)
    return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
