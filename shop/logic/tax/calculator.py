"""Sales tax for a single amount under one jurisdiction.

No rounding happens here; totals keep full precision until they are formatted.
"""
from __future__ import annotations
import logging
from decimal import Decimal

from shop.domain.errors import InvalidAmount
from shop.domain.Province import Jurisdiction
from shop.utilities.currency import ZERO, is_valid_amount, to_decimal

logger = logging.getLogger(__name__)

__all__ = ["calculate_tax", "calculate_total", "sanitize_amount"]


def sanitize_amount(amount) -> Decimal:
    """Coerce to Decimal, clamping negative, non-finite or unreadable input to zero."""
    try:
        value = to_decimal(amount)
    except InvalidAmount as e:
        logger.warning("%s; using 0", e)
        return ZERO
    if not is_valid_amount(value):
        logger.warning("Clamping invalid amount %r to 0", amount)
        return ZERO
    return value


def calculate_tax(amount, is_taxable: bool, jurisdiction: Jurisdiction) -> Decimal:
    if not is_taxable:
        return ZERO
    return sanitize_amount(amount) * jurisdiction.total_tax_rate


def calculate_total(amount, is_taxable: bool, jurisdiction: Jurisdiction) -> Decimal:
    value = sanitize_amount(amount)
    return value + calculate_tax(value, is_taxable, jurisdiction)
