"""ShoppingList domain entity: a named list with an optional budget.

Items are stored separately and reference their list by ``list_id``.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from shop.utilities.constants import TIMESTAMP_FORMAT
from shop.utilities.currency import money_str, to_decimal


def normalize_budget(budget) -> Optional[Decimal]:
    '''None, empty or zero means "no budget".'''
    if budget is None or budget == "":
        return None
    value = to_decimal(budget, "budget")
    return value if value > 0 else None


class ShoppingList:
    def __init__(self, name: str = "", budget=None, created_at: Optional[datetime] = None,
                 id: Optional[str] = None):
        self.id = id or str(uuid4())
        self.name = (name or "").strip()
        self.budget: Optional[Decimal] = normalize_budget(budget)
        self.created_at = created_at or datetime.now(timezone.utc)

    @property
    def has_budget(self) -> bool:
        return self.budget is not None

    def __str__(self) -> str:
        budget = f" (budget {self.budget})" if self.budget is not None else ""
        return f"Shopping List {self.name}{budget}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a ShoppingList from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        created = d.get("created_at")
        if created and not isinstance(created, datetime):
            try:
                d["created_at"] = datetime.strptime(created, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
            except (TypeError, ValueError):
                d["created_at"] = None
        allowed = {"id", "name", "budget", "created_at"}
        filtered = {k: v for k, v in d.items() if k in allowed}
        return ShoppingList(**filtered)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "budget": money_str(self.budget) if self.budget is not None else None,
            "created_at": self.created_at.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT),
        }
