"""Quote pricing engine.

Pure arithmetic over a quote's figures:

- ``resolve_covered_area``: covered area from total area and uncovered percent
- ``compute_line_total``: one line item under its service's pricing mode
- ``recompute_quote``: the full recomputation applied whenever area, floors,
  rate or plan change
- ``refresh_line_item`` / ``refresh_extras``: the single-item path

The functions read and write plain attributes, so they work on the ORM
models as well as on any object exposing the same names.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Optional
import logging

from arqui_api.services.money import HUNDRED, ONE, ZERO, round2, to_decimal

logger = logging.getLogger(__name__)

DEFAULT_UNCOVERED_PERCENT = Decimal("30")

# Fields whose change forces a full recomputation of the quote
RECOMPUTE_TRIGGERS = frozenset({
    "total_area",
    "covered_area",
    "uncovered_percent",
    "floor_count",
    "rate_per_area",
    "pricing_plan_id",
})


class PricingMode(str, Enum):
    """How a service's price is applied to a quote."""

    FLAT = "flat"
    PER_AREA = "per_area"
    PERCENT = "percent"


def normalize_uncovered_percent(
    value: Any, default: Decimal = DEFAULT_UNCOVERED_PERCENT
) -> Decimal:
    """Read-time fallback for stored or legacy uncovered percentages.

    Missing or non-finite values fall back to ``default``; anything outside
    [0, 100] is clamped. Caller-supplied edits are range-checked before they
    get here.
    """
    percent = to_decimal(value)
    if percent is None:
        return default
    return min(max(percent, ZERO), HUNDRED)


def resolve_covered_area(
    total_area: Any,
    uncovered_percent: Any,
    explicit_covered: Any = None,
) -> Decimal:
    """Covered area, rounded half-up to two places.

    A finite ``explicit_covered`` wins verbatim for this call only.
    """
    explicit = to_decimal(explicit_covered)
    if explicit is not None:
        return round2(explicit)

    area = to_decimal(total_area, ZERO)
    percent = normalize_uncovered_percent(uncovered_percent)
    return round2(area * (ONE - percent / HUNDRED))


def compute_base_cost(covered_area: Any, floor_count: Any, rate_per_area: Any) -> Decimal:
    return round2(
        to_decimal(covered_area, ZERO)
        * to_decimal(floor_count, ONE)
        * to_decimal(rate_per_area, ZERO)
    )


def compute_line_total(
    mode: Any,
    unit_price: Any,
    quantity: Any,
    total_area: Any,
    base_cost: Any,
) -> Decimal:
    """Total for one line item.

    ``quantity`` below 1 counts as 1 for the arithmetic. Rounding happens
    once, on the final amount.
    """
    qty = to_decimal(quantity)
    if qty is None or qty < ONE:
        qty = ONE
    price = to_decimal(unit_price, ZERO)

    try:
        pricing_mode = PricingMode(mode)
    except ValueError:
        logger.warning("Unknown pricing mode %r, pricing as flat", mode)
        pricing_mode = PricingMode.FLAT

    if pricing_mode is PricingMode.PER_AREA:
        total = price * to_decimal(total_area, ZERO) * qty
    elif pricing_mode is PricingMode.PERCENT:
        total = to_decimal(base_cost, ZERO) * (price / HUNDRED) * qty
    else:
        total = price * qty
    return round2(total)


def sum_line_totals(line_totals: Iterable[Any]) -> Decimal:
    return round2(sum((to_decimal(t, ZERO) for t in line_totals), ZERO))


def _item_mode(item) -> Optional[str]:
    mode = getattr(item, "pricing_mode", None)
    if mode is None and getattr(item, "service", None) is not None:
        mode = item.service.pricing_mode
    return mode


def refresh_line_item(quote, item) -> Decimal:
    """Recompute one item against the quote's current base cost and area."""
    item.line_total = compute_line_total(
        _item_mode(item),
        item.unit_price,
        item.quantity,
        quote.total_area,
        quote.base_cost,
    )
    return item.line_total


def refresh_extras(quote) -> None:
    """Re-derive extras and total from the full current set of line items."""
    quote.extras_cost = sum_line_totals(item.line_total for item in quote.line_items)
    quote.total_cost = round2(to_decimal(quote.base_cost, ZERO) + quote.extras_cost)


def recompute_quote(quote, explicit_covered: Any = None) -> None:
    """Re-establish every derived figure on ``quote`` in one pass.

    Covered area, then base cost, then every line item against the new base
    cost and area, then extras and total.
    """
    quote.covered_area = resolve_covered_area(
        quote.total_area, quote.uncovered_percent, explicit_covered
    )
    quote.base_cost = compute_base_cost(
        quote.covered_area, quote.floor_count, quote.rate_per_area
    )
    for item in quote.line_items:
        refresh_line_item(quote, item)
    refresh_extras(quote)
