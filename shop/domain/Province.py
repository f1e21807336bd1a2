"""Province tax regimes: the fixed GST/PST/HST table and lookups over it."""
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, List

from shop.domain.errors import UnknownJurisdiction
from shop.utilities.constants import FALLBACK_PROVINCE

logger = logging.getLogger(__name__)

GST_RATE = Decimal("0.05")
_HUNDRED = Decimal("100")
_TWO_PLACES = Decimal("0.01")


class Province(str, Enum):
    ONTARIO = "Ontario"
    QUEBEC = "Quebec"
    BRITISH_COLUMBIA = "British Columbia"
    ALBERTA = "Alberta"
    MANITOBA = "Manitoba"
    SASKATCHEWAN = "Saskatchewan"
    NOVA_SCOTIA = "Nova Scotia"
    NEW_BRUNSWICK = "New Brunswick"
    NEWFOUNDLAND = "Newfoundland"
    PRINCE_EDWARD_ISLAND = "Prince Edward Island"


@dataclass(frozen=True)
class Jurisdiction:
    name: str
    gst_rate: Decimal
    pst_rate: Decimal
    hst_rate: Decimal

    def __post_init__(self):
        if self.hst_rate > 0 and self.pst_rate > 0:
            raise ValueError(f"{self.name} cannot charge both PST and HST")

    @property
    def is_harmonized(self) -> bool:
        return self.hst_rate > 0

    @property
    def total_tax_rate(self) -> Decimal:
        if self.hst_rate > 0:
            return self.hst_rate
        return self.gst_rate + self.pst_rate

    def __str__(self) -> str:
        return f"{self.name} ({tax_description(self)})"


def _regime(province: Province, pst: str = "0", hst: str = "0") -> Jurisdiction:
    return Jurisdiction(province.value, GST_RATE, Decimal(pst), Decimal(hst))


# Declaration order is the order shown in the province picker
JURISDICTIONS: Dict[str, Jurisdiction] = {
    j.name: j for j in (
        _regime(Province.ONTARIO, hst="0.13"),
        _regime(Province.QUEBEC, pst="0.09975"),
        _regime(Province.BRITISH_COLUMBIA, pst="0.07"),
        _regime(Province.ALBERTA),
        _regime(Province.MANITOBA, pst="0.07"),
        _regime(Province.SASKATCHEWAN, pst="0.06"),
        _regime(Province.NOVA_SCOTIA, hst="0.15"),
        _regime(Province.NEW_BRUNSWICK, hst="0.15"),
        _regime(Province.NEWFOUNDLAND, hst="0.15"),
        _regime(Province.PRINCE_EDWARD_ISLAND, hst="0.15"),
    )
}


def rate_for(jurisdiction_id) -> Jurisdiction:
    """Return the regime for an exact province name; raise UnknownJurisdiction otherwise."""
    if isinstance(jurisdiction_id, Province):
        jurisdiction_id = jurisdiction_id.value
    try:
        return JURISDICTIONS[jurisdiction_id]
    except (KeyError, TypeError):
        raise UnknownJurisdiction(jurisdiction_id) from None


def resolve_jurisdiction(jurisdiction_id) -> Jurisdiction:
    """Lookup used by callers: an unknown key is logged and replaced by the fallback province."""
    try:
        return rate_for(jurisdiction_id)
    except UnknownJurisdiction as e:
        logger.warning("%s; falling back to %s", e, FALLBACK_PROVINCE)
        return JURISDICTIONS[FALLBACK_PROVINCE]


def is_known_jurisdiction(jurisdiction_id) -> bool:
    try:
        rate_for(jurisdiction_id)
    except UnknownJurisdiction:
        return False
    return True


def all_jurisdictions() -> List[Jurisdiction]:
    return list(JURISDICTIONS.values())


def total_tax_rate(jurisdiction: Jurisdiction) -> Decimal:
    return jurisdiction.total_tax_rate


def _whole_percent(rate: Decimal) -> int:
    return int(rate * _HUNDRED)


def _percent_2dp(rate: Decimal) -> str:
    return str((rate * _HUNDRED).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def tax_description(jurisdiction: Jurisdiction) -> str:
    """Human readable breakdown, e.g. 'HST 13%' or 'GST 5% + PST 9.98%'."""
    gst = _whole_percent(jurisdiction.gst_rate)
    if jurisdiction.hst_rate > 0:
        return f"HST {_whole_percent(jurisdiction.hst_rate)}%"
    if jurisdiction.pst_rate > 0:
        return f"GST {gst}% + PST {_percent_2dp(jurisdiction.pst_rate)}%"
    return f"GST {gst}%"


def total_rate_label(jurisdiction: Jurisdiction) -> str:
    """Combined rate with two decimals, e.g. '14.98%'."""
    return f"{_percent_2dp(jurisdiction.total_tax_rate)}%"


def to_dict(jurisdiction: Jurisdiction) -> dict:
    return {
        "name": jurisdiction.name,
        "gst_rate": str(jurisdiction.gst_rate),
        "pst_rate": str(jurisdiction.pst_rate),
        "hst_rate": str(jurisdiction.hst_rate),
        "total_tax_rate": str(jurisdiction.total_tax_rate),
        "description": tax_description(jurisdiction),
        "total_rate_label": total_rate_label(jurisdiction),
    }


__all__ = [
    "Province", "Jurisdiction", "JURISDICTIONS", "GST_RATE",
    "rate_for", "resolve_jurisdiction", "is_known_jurisdiction", "all_jurisdictions",
    "total_tax_rate", "tax_description", "total_rate_label", "to_dict",
]
