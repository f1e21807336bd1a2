from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from shop.api.dependencies import get_store
from shop.domain.Province import tax_description, total_rate_label
from shop.infra.store import ShopStore
from shop.logic.tax.calculator import calculate_tax, calculate_total
from shop.utilities.constants import QUICK_AMOUNTS
from shop.utilities.currency import format_price, money_str
from shop.utilities.validators import CalculatorQuery

router = APIRouter(prefix="/api", tags=["calculator"])


@router.get("/calculator")
def calculator(amount: str = "0", taxable: bool = True, province: str = None,
               store: ShopStore = Depends(get_store)):
    """Tax on a single amount; the province defaults to the stored preference."""
    try:
        query = CalculatorQuery(amount=amount, taxable=taxable, province=province)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    jurisdiction = store.jurisdiction(query.province)
    tax = calculate_tax(query.amount, query.taxable, jurisdiction)
    total = calculate_total(query.amount, query.taxable, jurisdiction)
    return {
        "province": jurisdiction.name,
        "description": tax_description(jurisdiction),
        "rate_label": total_rate_label(jurisdiction),
        "taxable": query.taxable,
        "quick_amounts": list(QUICK_AMOUNTS),
        "amount": money_str(query.amount),
        "tax": money_str(tax),
        "total": money_str(total),
        "display": {
            "amount": format_price(query.amount),
            "tax": format_price(tax),
            "total": format_price(total),
        },
    }
