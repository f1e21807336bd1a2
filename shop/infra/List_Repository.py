import logging
from pathlib import Path
from typing import Dict, List, Optional

from shop.domain.ShoppingList import ShoppingList, normalize_budget
from shop.infra.json_store import JsonRepository, JsonStore
from shop.infra.paths import DATA_DIR, LISTS_FILENAME, data_file

logger = logging.getLogger(__name__)

_UNSET = object()


class ListRepository(JsonRepository):
    def __init__(self, data_dir: Path = DATA_DIR):
        super().__init__(JsonStore(data_file(LISTS_FILENAME, data_dir)))
        self._lists: Dict[str, ShoppingList] = {}
        for entry in self._load_raw():
            try:
                lst = ShoppingList.from_dict(entry)
            except ValueError as e:
                logger.warning("Skipping unreadable list entry %r: %s", entry, e)
                continue
            self._lists[lst.id] = lst

    def _snapshot(self):
        return [lst.to_dict() for lst in self._lists.values()]

    def list_all(self) -> List[ShoppingList]:
        """All lists, newest first."""
        return sorted(self._lists.values(), key=lambda l: l.created_at, reverse=True)

    def get(self, list_id: str) -> Optional[ShoppingList]:
        return self._lists.get(list_id)

    def create(self, name: str, budget=None) -> ShoppingList:
        lst = ShoppingList(name=name, budget=budget)
        self._lists[lst.id] = lst
        self._persist()
        logger.info("Created list %s (%s)", lst.name, lst.id)
        return lst

    def update(self, list_id: str, name: Optional[str] = None, budget=_UNSET) -> Optional[ShoppingList]:
        """Rename and/or change the budget. Pass budget=None to clear it."""
        lst = self._lists.get(list_id)
        if lst is None:
            return None
        if name is not None:
            lst.name = name.strip()
        if budget is not _UNSET:
            lst.budget = normalize_budget(budget)
        self._persist()
        return lst

    def delete(self, list_id: str) -> bool:
        if self._lists.pop(list_id, None) is None:
            return False
        self._persist()
        return True

    def clear(self) -> None:
        self._lists.clear()
        self._persist()
