from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from shop.api.dependencies import get_store
from shop.domain.Province import Jurisdiction, to_dict as jurisdiction_to_dict
from shop.domain.ShoppingList import ShoppingList
from shop.events.event_helpers import notify_budget_change
from shop.infra.pdf_utils import generate_pdf_for_list
from shop.infra.store import ShopStore
from shop.logic.shopping.summary import group_items_by_category, line_tax, purchased_subtotal, summarize
from shop.logic.tax.classifier import is_taxable
from shop.utilities.currency import budget_badge, format_price, money_str
from shop.utilities.validators import ItemInput, ListInput, ListUpdate

router = APIRouter(prefix="/api/lists", tags=["lists"])


def require_list(store: ShopStore, list_id: str) -> ShoppingList:
    lst = store.lists.get(list_id)
    if lst is None:
        raise HTTPException(status_code=404, detail="List not found")
    return lst


def item_payload(item, jurisdiction: Jurisdiction) -> dict:
    data = item.to_dict()
    data.update({
        "taxable": is_taxable(item.category_name),
        "line_total": money_str(item.line_total),
        "line_tax": money_str(line_tax(item, jurisdiction)),
        "display_price": format_price(item.price),
        "display_line_total": format_price(item.line_total),
    })
    return data


def list_row(store: ShopStore, lst: ShoppingList, jurisdiction: Jurisdiction) -> dict:
    """Overview row: totals, amount already spent and the budget badge."""
    items = store.items.for_list(lst.id)
    summary = summarize(items, jurisdiction, lst.budget)
    row = lst.to_dict()
    row.update({
        "summary": summary.to_dict(),
        "spent": money_str(purchased_subtotal(items)),
        "display_spent": format_price(purchased_subtotal(items)),
        "badge": budget_badge(summary.budget_variance),
    })
    return row


@router.get("")
def get_lists(store: ShopStore = Depends(get_store)):
    jurisdiction = store.jurisdiction()
    return {
        "province": jurisdiction.name,
        "lists": [list_row(store, lst, jurisdiction) for lst in store.lists.list_all()],
    }


@router.post("", status_code=201)
def create_list(data: ListInput, store: ShopStore = Depends(get_store)):
    lst = store.lists.create(data.name, data.budget)
    return list_row(store, lst, store.jurisdiction())


@router.get("/{list_id}")
def get_list(list_id: str, province: Optional[str] = Query(default=None),
             store: ShopStore = Depends(get_store)):
    """List detail. Hidden purchased items still count in the summary."""
    lst = require_list(store, list_id)
    jurisdiction = store.jurisdiction(province)
    items = store.items.for_list(list_id)
    summary = summarize(items, jurisdiction, lst.budget)
    shown = items if store.settings.get().show_purchased_items else [i for i in items if not i.is_purchased]
    groups = [
        {"category": name, "items": [item_payload(i, jurisdiction) for i in group]}
        for name, group in group_items_by_category(shown).items()
    ]
    data = lst.to_dict()
    data.update({
        "jurisdiction": jurisdiction_to_dict(jurisdiction),
        "groups": groups,
        "summary": summary.to_dict(),
        "spent": money_str(purchased_subtotal(items)),
    })
    return data


@router.put("/{list_id}")
def update_list(list_id: str, data: ListUpdate, store: ShopStore = Depends(get_store)):
    lst = require_list(store, list_id)
    jurisdiction = store.jurisdiction()
    items = store.items.for_list(list_id)
    before = summarize(items, jurisdiction, lst.budget)
    if "budget" in data.model_fields_set:
        lst = store.lists.update(list_id, name=data.name, budget=data.budget)
    else:
        lst = store.lists.update(list_id, name=data.name)
    notify_budget_change(lst, before, summarize(items, jurisdiction, lst.budget), jurisdiction)
    return list_row(store, lst, jurisdiction)


@router.delete("/{list_id}")
def delete_list(list_id: str, store: ShopStore = Depends(get_store)):
    if not store.delete_list(list_id):
        raise HTTPException(status_code=404, detail="List not found")
    return {"ok": True}


@router.get("/{list_id}/summary")
def get_list_summary(list_id: str, province: Optional[str] = Query(default=None),
                     store: ShopStore = Depends(get_store)):
    lst = require_list(store, list_id)
    jurisdiction = store.jurisdiction(province)
    summary = summarize(store.items.for_list(list_id), jurisdiction, lst.budget)
    return {"list_id": list_id, "province": jurisdiction.name, **summary.to_dict()}


@router.get("/{list_id}/export.pdf")
def export_list_pdf(list_id: str, province: Optional[str] = Query(default=None),
                    store: ShopStore = Depends(get_store)):
    lst = require_list(store, list_id)
    jurisdiction = store.jurisdiction(province)
    items = store.items.for_list(list_id)
    summary = summarize(items, jurisdiction, lst.budget)
    pdf_bytes = generate_pdf_for_list(lst, items, summary, jurisdiction)
    filename = f"shopping_list_{lst.id}.pdf"
    return Response(content=pdf_bytes, media_type="application/pdf",
                    headers={"Content-Disposition": f"attachment; filename={filename}"})


@router.post("/{list_id}/items", status_code=201)
def add_item(list_id: str, data: ItemInput, store: ShopStore = Depends(get_store)):
    lst = require_list(store, list_id)
    jurisdiction = store.jurisdiction()
    before = summarize(store.items.for_list(list_id), jurisdiction, lst.budget)
    item = store.items.create(
        list_id, data.name, data.price, quantity=data.quantity,
        category_name=data.category_name, notes=data.notes, is_purchased=data.is_purchased,
    )
    after = summarize(store.items.for_list(list_id), jurisdiction, lst.budget)
    notify_budget_change(lst, before, after, jurisdiction)
    return {"item": item_payload(item, jurisdiction), "summary": after.to_dict()}
