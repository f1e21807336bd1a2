from pathlib import Path

from shop.utilities.config import DATA_DIR

# Centralized data file names (single source of truth)
LISTS_FILENAME = 'lists.json'
ITEMS_FILENAME = 'items.json'
CATEGORIES_FILENAME = 'categories.json'
SETTINGS_FILENAME = 'settings.json'

DATA_FILENAMES = (LISTS_FILENAME, ITEMS_FILENAME, CATEGORIES_FILENAME, SETTINGS_FILENAME)


def data_file(filename: str, data_dir: Path = DATA_DIR) -> Path:
    return Path(data_dir) / filename


__all__ = ['DATA_DIR', 'LISTS_FILENAME', 'ITEMS_FILENAME', 'CATEGORIES_FILENAME',
           'SETTINGS_FILENAME', 'DATA_FILENAMES', 'data_file']
