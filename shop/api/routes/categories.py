from fastapi import APIRouter, Depends, HTTPException

from shop.api.dependencies import get_store
from shop.infra.Category_Repository import DuplicateCategoryError
from shop.infra.store import ShopStore
from shop.logic.tax.classifier import group_categories_by_taxability
from shop.utilities.constants import CATEGORY_COLORS, CATEGORY_ICONS
from shop.utilities.validators import CategoryInput, CategoryUpdate

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("")
def get_categories(store: ShopStore = Depends(get_store)):
    """Categories grouped into exempt and taxable. Defaults are created on first use."""
    store.categories.seed_defaults()
    groups = group_categories_by_taxability(store.categories.list_all())
    return {key: [c.to_dict() for c in cats] for key, cats in groups.items()}


@router.post("", status_code=201)
def create_category(data: CategoryInput, store: ShopStore = Depends(get_store)):
    try:
        category = store.categories.create(data.name, is_taxable=data.is_taxable,
                                           color_hex=data.color_hex, icon_name=data.icon_name)
    except DuplicateCategoryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return category.to_dict()


@router.get("/options")
def get_category_options():
    """Palette and icon names offered by the category editor."""
    return {"colors": list(CATEGORY_COLORS), "icons": list(CATEGORY_ICONS)}


@router.post("/defaults")
def seed_default_categories(store: ShopStore = Depends(get_store)):
    return {"created": store.categories.seed_defaults()}


@router.put("/{category_id}")
def update_category(category_id: str, data: CategoryUpdate, store: ShopStore = Depends(get_store)):
    try:
        category = store.categories.update(category_id, name=data.name, is_taxable=data.is_taxable,
                                           color_hex=data.color_hex, icon_name=data.icon_name)
    except DuplicateCategoryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category.to_dict()


@router.delete("/{category_id}")
def delete_category(category_id: str, store: ShopStore = Depends(get_store)):
    if not store.categories.delete(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return {"ok": True}
