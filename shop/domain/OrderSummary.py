"""OrderSummary: derived totals of a set of line items (never persisted)."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from shop.utilities.currency import budget_message, format_price, money_str


@dataclass(frozen=True)
class OrderSummary:
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    purchased_count: int
    item_count: int
    # None means no budget was set, which is not the same as nothing remaining
    budget_variance: Optional[Decimal] = None

    @property
    def percent_complete(self) -> int:
        if self.item_count == 0:
            return 0
        return int(self.purchased_count * 100 / self.item_count)

    @property
    def is_over_budget(self) -> bool:
        return self.budget_variance is not None and self.budget_variance < 0

    def to_dict(self):
        '''Exact values plus their display strings.'''
        variance = self.budget_variance
        return {
            "subtotal": money_str(self.subtotal),
            "tax_amount": money_str(self.tax_amount),
            "total": money_str(self.total),
            "purchased_count": self.purchased_count,
            "item_count": self.item_count,
            "percent_complete": self.percent_complete,
            "budget_variance": money_str(variance) if variance is not None else None,
            "is_over_budget": self.is_over_budget,
            "display": {
                "subtotal": format_price(self.subtotal),
                "tax_amount": format_price(self.tax_amount),
                "total": format_price(self.total),
                "budget": budget_message(variance),
            },
        }
