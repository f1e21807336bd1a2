"""Taxability classification of line items by their category name.

Item tax is decided by an exact, case-sensitive match against the fixed
exempt-name set. The editable ``Category.is_taxable`` flag does not take part
in tax math; it only splits the category listing into its two sections.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional

from shop.domain.Category import Category
from shop.utilities.constants import EXEMPT_CATEGORY_NAMES

__all__ = ["is_taxable", "is_exempt_name", "group_categories_by_taxability"]


def is_exempt_name(category_name: Optional[str]) -> bool:
    return bool(category_name) and category_name in EXEMPT_CATEGORY_NAMES


def is_taxable(category_name: Optional[str]) -> bool:
    """Uncategorized (None or empty) items are taxable; so is any name outside the exempt set."""
    if not category_name:
        return True
    return not is_exempt_name(category_name)


def group_categories_by_taxability(categories: Iterable[Category]) -> Dict[str, List[Category]]:
    """Split categories into 'exempt' and 'taxable' by their own flag, each sorted by name."""
    ordered = sorted(categories, key=lambda c: c.name)
    return {
        "exempt": [c for c in ordered if not c.is_taxable],
        "taxable": [c for c in ordered if c.is_taxable],
    }
