from fastapi import APIRouter, Depends, HTTPException

from shop.api.dependencies import get_store
from shop.api.routes.lists import item_payload
from shop.events.event_helpers import notify_budget_change
from shop.infra.store import ShopStore
from shop.logic.shopping.summary import summarize
from shop.utilities.validators import ItemUpdate

router = APIRouter(prefix="/api/items", tags=["items"])


def _mutate(store: ShopStore, item_id: str, change):
    """Apply change(item_id) and publish a budget event if the list crosses its budget."""
    item = store.items.get(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    lst = store.lists.get(item.list_id)
    jurisdiction = store.jurisdiction()
    budget = lst.budget if lst else None
    before = summarize(store.items.for_list(item.list_id), jurisdiction, budget)
    updated = change(item_id)
    after = summarize(store.items.for_list(item.list_id), jurisdiction, budget)
    if lst is not None:
        notify_budget_change(lst, before, after, jurisdiction)
    return updated, after


@router.put("/{item_id}")
def update_item(item_id: str, data: ItemUpdate, store: ShopStore = Depends(get_store)):
    changes = data.changes()
    item, summary = _mutate(store, item_id, lambda i: store.items.update(i, **changes))
    return {"item": item_payload(item, store.jurisdiction()), "summary": summary.to_dict()}


@router.post("/{item_id}/toggle")
def toggle_item(item_id: str, store: ShopStore = Depends(get_store)):
    item, summary = _mutate(store, item_id, store.items.toggle_purchased)
    return {"item": item_payload(item, store.jurisdiction()), "summary": summary.to_dict()}


@router.delete("/{item_id}")
def delete_item(item_id: str, store: ShopStore = Depends(get_store)):
    _, summary = _mutate(store, item_id, store.items.delete)
    return {"ok": True, "summary": summary.to_dict()}
