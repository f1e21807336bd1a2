from functools import lru_cache

from shop.infra.store import ShopStore
from shop.utilities.config import DATA_DIR


@lru_cache(maxsize=1)
def get_store() -> ShopStore:
    """Process-wide repository bundle. Tests swap it through app.dependency_overrides."""
    return ShopStore(DATA_DIR)
