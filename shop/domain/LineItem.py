"""LineItem domain entity: one product entry of a shopping list.

``category_name`` is a snapshot of the category's name at the time the item
was saved; it is not updated when the category is renamed or deleted.
"""
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from shop.utilities.constants import MIN_QUANTITY
from shop.utilities.currency import ZERO, money_str, to_decimal


def _optional_text(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class LineItem:
    def __init__(self, name: str = "", price=ZERO, quantity: int = MIN_QUANTITY,
                 category_name: Optional[str] = None, is_purchased: bool = False,
                 notes: Optional[str] = None, list_id: Optional[str] = None,
                 id: Optional[str] = None):
        self.id = id or str(uuid4())
        self.list_id = list_id
        self.name = (name or "").strip()
        self.price: Decimal = to_decimal(price, "price")
        self.quantity = int(quantity)
        # Empty string means uncategorized, same as None
        self.category_name = _optional_text(category_name)
        self.is_purchased = bool(is_purchased)
        self.notes = _optional_text(notes)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def toggle_purchased(self) -> bool:
        self.is_purchased = not self.is_purchased
        return self.is_purchased

    def __str__(self) -> str:
        parts = [f"{self.name} x{self.quantity} @ {self.price}"]
        if self.category_name:
            parts.append(self.category_name)
        if self.is_purchased:
            parts.append("purchased")
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a LineItem from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "list_id", "name", "price", "quantity", "category_name", "is_purchased", "notes"}
        filtered = {k: v for k, v in d.items() if k in allowed}
        filtered.setdefault("price", ZERO)
        filtered.setdefault("quantity", MIN_QUANTITY)
        return LineItem(**filtered)

    def to_dict(self):
        '''Converts the LineItem to a dictionary for JSON persistence; price kept as an exact string.'''
        return {
            "id": self.id,
            "list_id": self.list_id,
            "name": self.name,
            "price": money_str(self.price),
            "quantity": self.quantity,
            "category_name": self.category_name,
            "is_purchased": self.is_purchased,
            "notes": self.notes,
        }
