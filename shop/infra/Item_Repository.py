import logging
from pathlib import Path
from typing import Dict, List, Optional

from shop.domain.LineItem import LineItem
from shop.infra.json_store import JsonRepository, JsonStore
from shop.infra.paths import DATA_DIR, ITEMS_FILENAME, data_file

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {"name", "price", "quantity", "category_name", "is_purchased", "notes"}


class ItemRepository(JsonRepository):
    def __init__(self, data_dir: Path = DATA_DIR):
        super().__init__(JsonStore(data_file(ITEMS_FILENAME, data_dir)))
        self._items: Dict[str, LineItem] = {}
        for entry in self._load_raw():
            try:
                item = LineItem.from_dict(entry)
            except ValueError as e:
                logger.warning("Skipping unreadable item entry %r: %s", entry, e)
                continue
            self._items[item.id] = item

    def _snapshot(self):
        return [item.to_dict() for item in self._items.values()]

    def get(self, item_id: str) -> Optional[LineItem]:
        return self._items.get(item_id)

    def for_list(self, list_id: str) -> List[LineItem]:
        return [i for i in self._items.values() if i.list_id == list_id]

    def create(self, list_id: str, name: str, price, quantity: int = 1,
               category_name: Optional[str] = None, notes: Optional[str] = None,
               is_purchased: bool = False) -> LineItem:
        item = LineItem(name=name, price=price, quantity=quantity, category_name=category_name,
                        is_purchased=is_purchased, notes=notes, list_id=list_id)
        self._items[item.id] = item
        self._persist()
        return item

    def update(self, item_id: str, **fields) -> Optional[LineItem]:
        """Apply edits to an item; fields outside EDITABLE_FIELDS are rejected."""
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot edit item fields: {sorted(unknown)}")
        item = self._items.get(item_id)
        if item is None:
            return None
        # Rebuild through the constructor so normalization rules apply to edits too
        data = item.to_dict()
        data.update(fields)
        updated = LineItem.from_dict(data)
        self._items[item_id] = updated
        self._persist()
        return updated

    def toggle_purchased(self, item_id: str) -> Optional[LineItem]:
        item = self._items.get(item_id)
        if item is None:
            return None
        item.toggle_purchased()
        self._persist()
        return item

    def delete(self, item_id: str) -> bool:
        if self._items.pop(item_id, None) is None:
            return False
        self._persist()
        return True

    def delete_for_list(self, list_id: str) -> int:
        doomed = [i.id for i in self._items.values() if i.list_id == list_id]
        for item_id in doomed:
            del self._items[item_id]
        if doomed:
            self._persist()
        return len(doomed)

    def clear(self) -> None:
        self._items.clear()
        self._persist()
