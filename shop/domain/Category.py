"""Category domain entity: user-editable product category with a taxable flag, color and icon."""
from typing import Optional
from uuid import uuid4

from shop.utilities.constants import DEFAULT_CATEGORY_COLOR, DEFAULT_CATEGORY_ICON


class Category:
    def __init__(self, name: str = "", is_taxable: bool = True,
                 color_hex: str = DEFAULT_CATEGORY_COLOR, icon_name: str = DEFAULT_CATEGORY_ICON,
                 id: Optional[str] = None):
        self.id = id or str(uuid4())
        self.name = (name or "").strip()
        self.is_taxable = bool(is_taxable)
        self.color_hex = color_hex or DEFAULT_CATEGORY_COLOR
        self.icon_name = icon_name or DEFAULT_CATEGORY_ICON

    def __str__(self) -> str:
        return f"{self.name} ({'Taxable' if self.is_taxable else 'Tax-exempt'})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a Category from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "name", "is_taxable", "color_hex", "icon_name"}
        filtered = {k: v for k, v in d.items() if k in allowed}
        return Category(**filtered)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "is_taxable": self.is_taxable,
            "color_hex": self.color_hex,
            "icon_name": self.icon_name,
        }
