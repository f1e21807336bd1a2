"""Money helpers: Decimal coercion and canonical '$' display strings.

Amounts travel through the engine unrounded; rounding to cents happens only
here, when a value is rendered for display.
"""
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from shop.domain.errors import InvalidAmount
from shop.utilities.constants import CENTS, CURRENCY_SYMBOL

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
_FALLBACK = f"{CURRENCY_SYMBOL}0.00"


def to_decimal(value, field: str = "amount") -> Decimal:
    """Coerce int/float/str/Decimal to Decimal. Floats go through str() to keep 4.99 as 4.99."""
    if isinstance(value, bool) or value is None:
        raise InvalidAmount(value, field)
    if isinstance(value, Decimal):
        return value
    try:
        if isinstance(value, float):
            return Decimal(str(value))
        if isinstance(value, int):
            return Decimal(value)
        if isinstance(value, str):
            return Decimal(value.strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmount(value, field) from None
    raise InvalidAmount(value, field)


def is_valid_amount(value: Decimal) -> bool:
    return value.is_finite() and value >= 0


def validate_amount(value, field: str = "amount") -> Decimal:
    """Entry validation for prices and budgets: finite and non-negative, else InvalidAmount."""
    amount = to_decimal(value, field)
    if not is_valid_amount(amount):
        raise InvalidAmount(value, field)
    return amount


def round_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_price(amount) -> str:
    """Render as '$1,234.56'. Negative values keep the sign after the symbol: '$-12.34'.

    Never raises; anything that cannot be rendered becomes '$0.00'.
    """
    try:
        value = to_decimal(amount)
        if not value.is_finite():
            return _FALLBACK
        rounded = round_cents(value)
        if rounded == 0:
            # -0.001 rounds to -0.00
            rounded = abs(rounded)
        return f"{CURRENCY_SYMBOL}{rounded:,.2f}"
    except (InvalidAmount, InvalidOperation, ValueError, OverflowError) as e:
        logger.debug("Cannot format %r as currency: %s", amount, e)
        return _FALLBACK


def budget_message(variance: Optional[Decimal]) -> Optional[str]:
    """'Remaining: $x' or 'Over by: $y' (overage shown as a positive value); None without a budget."""
    if variance is None:
        return None
    if variance >= 0:
        return f"Remaining: {format_price(variance)}"
    return f"Over by: {format_price(abs(variance))}"


def budget_badge(variance: Optional[Decimal]) -> Optional[str]:
    """Short form used on list overview rows."""
    if variance is None:
        return None
    if variance >= 0:
        return f"Remaining: {format_price(variance)}"
    return "Over budget!"


def money_str(amount: Decimal) -> str:
    """Exact plain-string serialization for JSON payloads (no rounding)."""
    return format(amount, "f")


__all__ = [
    "ZERO", "to_decimal", "is_valid_amount", "validate_amount", "round_cents",
    "format_price", "budget_message", "budget_badge", "money_str",
]
