"""Category repository: CRUD over categories.json plus first-run seeding."""
import logging
from pathlib import Path
from typing import Dict, List, Optional

from shop.domain.Category import Category
from shop.infra.json_store import JsonRepository, JsonStore
from shop.infra.paths import CATEGORIES_FILENAME, DATA_DIR, data_file
from shop.utilities.constants import DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)


class DuplicateCategoryError(ValueError):
    pass


class CategoryRepository(JsonRepository):
    def __init__(self, data_dir: Path = DATA_DIR):
        super().__init__(JsonStore(data_file(CATEGORIES_FILENAME, data_dir)))
        self._categories: Dict[str, Category] = {}
        for entry in self._load_raw():
            category = Category.from_dict(entry)
            self._categories[category.id] = category

    def _snapshot(self):
        return [c.to_dict() for c in self._categories.values()]

    def list_all(self) -> List[Category]:
        return sorted(self._categories.values(), key=lambda c: c.name)

    def get(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def find_by_name(self, name: str) -> Optional[Category]:
        name = (name or "").strip()
        return next((c for c in self._categories.values() if c.name == name), None)

    def _check_unique(self, name: str, ignore_id: Optional[str] = None):
        existing = self.find_by_name(name)
        if existing is not None and existing.id != ignore_id:
            raise DuplicateCategoryError(f"Category '{name.strip()}' already exists")

    def create(self, name: str, is_taxable: bool = True, color_hex: Optional[str] = None,
               icon_name: Optional[str] = None) -> Category:
        self._check_unique(name)
        category = Category(name=name, is_taxable=is_taxable, color_hex=color_hex, icon_name=icon_name)
        self._categories[category.id] = category
        self._persist()
        return category

    def update(self, category_id: str, name: Optional[str] = None, is_taxable: Optional[bool] = None,
               color_hex: Optional[str] = None, icon_name: Optional[str] = None) -> Optional[Category]:
        """Edit in place. Items keep the category name they were saved with."""
        category = self._categories.get(category_id)
        if category is None:
            return None
        if name is not None:
            self._check_unique(name, ignore_id=category_id)
            category.name = name.strip()
        if is_taxable is not None:
            category.is_taxable = bool(is_taxable)
        if color_hex:
            category.color_hex = color_hex
        if icon_name:
            category.icon_name = icon_name
        self._persist()
        return category

    def delete(self, category_id: str) -> bool:
        if self._categories.pop(category_id, None) is None:
            return False
        self._persist()
        return True

    def seed_defaults(self) -> int:
        """Create the default categories when none exist yet. Returns how many were created."""
        if self._categories:
            return 0
        for name, color, icon, taxable in DEFAULT_CATEGORIES:
            category = Category(name=name, is_taxable=taxable, color_hex=color, icon_name=icon)
            self._categories[category.id] = category
        self._persist()
        logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))
        return len(DEFAULT_CATEGORIES)

    def clear(self) -> None:
        self._categories.clear()
        self._persist()
