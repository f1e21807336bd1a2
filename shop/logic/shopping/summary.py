"""Order aggregation for a shopping list.

Provides summarize(items, jurisdiction, budget=None) -> OrderSummary and the
small per-item helpers the list views need.
"""
from __future__ import annotations
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from shop.domain.LineItem import LineItem
from shop.domain.OrderSummary import OrderSummary
from shop.domain.Province import Jurisdiction
from shop.logic.tax.calculator import calculate_tax, sanitize_amount
from shop.logic.tax.classifier import is_taxable
from shop.utilities.constants import UNCATEGORIZED_LABEL
from shop.utilities.currency import ZERO

__all__ = ["summarize", "line_total", "line_tax", "purchased_subtotal", "group_items_by_category"]


def line_total(item: LineItem) -> Decimal:
    return sanitize_amount(item.line_total)


def line_tax(item: LineItem, jurisdiction: Jurisdiction) -> Decimal:
    return calculate_tax(line_total(item), is_taxable(item.category_name), jurisdiction)


def summarize(items: Iterable[LineItem], jurisdiction: Jurisdiction, budget: Optional[Decimal] = None) -> OrderSummary:
    """Fold line items into subtotal, tax, total, purchased progress and budget variance.

    Sums are order independent. Tax is computed per item on its unrounded line
    total. A budget of None or 0 means "no budget": budget_variance is None.
    """
    subtotal = ZERO
    tax_amount = ZERO
    purchased = 0
    count = 0
    for item in items:
        amount = line_total(item)
        subtotal += amount
        tax_amount += calculate_tax(amount, is_taxable(item.category_name), jurisdiction)
        count += 1
        if item.is_purchased:
            purchased += 1

    total = subtotal + tax_amount
    variance = None
    if budget is not None:
        budget = sanitize_amount(budget)
        if budget > 0:
            variance = budget - total

    return OrderSummary(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total=total,
        purchased_count=purchased,
        item_count=count,
        budget_variance=variance,
    )


def purchased_subtotal(items: Iterable[LineItem]) -> Decimal:
    """Pre-tax amount already spent (purchased items only)."""
    return sum((line_total(i) for i in items if i.is_purchased), ZERO)


def group_items_by_category(items: Iterable[LineItem]) -> Dict[str, List[LineItem]]:
    """Group for display by category snapshot; keys sorted, missing category under 'Uncategorized'."""
    groups: Dict[str, List[LineItem]] = defaultdict(list)
    for item in items:
        groups[item.category_name or UNCATEGORIZED_LABEL].append(item)
    return {k: groups[k] for k in sorted(groups)}
