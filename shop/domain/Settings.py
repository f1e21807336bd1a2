"""Settings domain entity: user preferences (selected province, display options, default budget)."""
from decimal import Decimal

from shop.utilities.config import DEFAULT_PROVINCE
from shop.utilities.currency import ZERO, money_str, to_decimal


class Settings:
    def __init__(self, selected_province: str = DEFAULT_PROVINCE, show_purchased_items: bool = True,
                 default_budget=ZERO):
        # Stored as given; callers resolve it through the province registry
        self.selected_province = selected_province
        self.show_purchased_items = bool(show_purchased_items)
        self.default_budget: Decimal = to_decimal(default_budget, "default_budget")

    def __str__(self) -> str:
        return f"Settings(province={self.selected_province}, show_purchased={self.show_purchased_items})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"selected_province", "show_purchased_items", "default_budget"}
        return Settings(**{k: v for k, v in d.items() if k in allowed})

    def to_dict(self):
        return {
            "selected_province": self.selected_province,
            "show_purchased_items": self.show_purchased_items,
            "default_budget": money_str(self.default_budget),
        }
