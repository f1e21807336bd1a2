"""ShopStore: the repositories of one data directory, plus operations spanning several of them."""
import logging
from pathlib import Path
from typing import Optional

from shop.domain.Province import Jurisdiction, resolve_jurisdiction
from shop.infra.Category_Repository import CategoryRepository
from shop.infra.Item_Repository import ItemRepository
from shop.infra.List_Repository import ListRepository
from shop.infra.paths import DATA_DIR
from shop.infra.Settings_Repository import SettingsRepository

logger = logging.getLogger(__name__)


class ShopStore:
    def __init__(self, data_dir: Path = DATA_DIR):
        self.data_dir = Path(data_dir)
        self.lists = ListRepository(self.data_dir)
        self.items = ItemRepository(self.data_dir)
        self.categories = CategoryRepository(self.data_dir)
        self.settings = SettingsRepository(self.data_dir)

    def jurisdiction(self, override: Optional[str] = None) -> Jurisdiction:
        """Explicit override first, then the stored preference; unknown keys fall back to Ontario."""
        key = override if override else self.settings.get().selected_province
        return resolve_jurisdiction(key)

    def delete_list(self, list_id: str) -> bool:
        """Delete a list and every item that belongs to it."""
        if self.lists.get(list_id) is None:
            return False
        removed = self.items.delete_for_list(list_id)
        self.lists.delete(list_id)
        logger.info("Deleted list %s with %d item(s)", list_id, removed)
        return True

    def reset_all(self) -> None:
        """Remove all lists, items and categories. Preferences are kept."""
        self.items.clear()
        self.lists.clear()
        self.categories.clear()
        logger.warning("All shopping data has been reset")
