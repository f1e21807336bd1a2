import logging

from fastapi import APIRouter, Depends

from shop.api.dependencies import get_store
from shop.domain.Province import all_jurisdictions, to_dict as jurisdiction_to_dict
from shop.infra.store import ShopStore
from shop.utilities.validators import SettingsUpdate

router = APIRouter(prefix="/api", tags=["settings"])
logger = logging.getLogger(__name__)


@router.get("/provinces")
def get_provinces():
    return [jurisdiction_to_dict(j) for j in all_jurisdictions()]


def _settings_payload(store: ShopStore) -> dict:
    data = store.settings.get().to_dict()
    # The stored name may be unknown (hand-edited file); report what is actually applied
    data["jurisdiction"] = jurisdiction_to_dict(store.jurisdiction())
    return data


@router.get("/settings")
def get_settings(store: ShopStore = Depends(get_store)):
    return _settings_payload(store)


@router.put("/settings")
def update_settings(data: SettingsUpdate, store: ShopStore = Depends(get_store)):
    store.settings.update(**data.model_dump())
    logger.info("Settings updated: %s", store.settings.get())
    return _settings_payload(store)
