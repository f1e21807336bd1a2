"""Event helper utilities.

Quick import:
    from shop.events.event_helpers import notify_budget_change

"""
from __future__ import annotations
from typing import Any

from shop.domain.OrderSummary import OrderSummary
from shop.domain.Province import Jurisdiction
from .Event_Bus import publish, LIST_OVER_BUDGET, LIST_WITHIN_BUDGET

__all__ = ['publish_over_budget', 'publish_within_budget', 'notify_budget_change']


def publish_over_budget(shopping_list: Any, summary: OrderSummary, jurisdiction: Jurisdiction):
    """Publish a list.over_budget event."""
    publish(LIST_OVER_BUDGET, {
        'list': shopping_list,
        'summary': summary,
        'jurisdiction': jurisdiction,
    })


def publish_within_budget(shopping_list: Any, summary: OrderSummary, jurisdiction: Jurisdiction):
    """Publish a list.within_budget event."""
    publish(LIST_WITHIN_BUDGET, {
        'list': shopping_list,
        'summary': summary,
        'jurisdiction': jurisdiction,
    })


def notify_budget_change(shopping_list: Any, before: OrderSummary, after: OrderSummary,
                         jurisdiction: Jurisdiction) -> None:
    """Publish only when a mutation moves the list across its budget line."""
    if after.is_over_budget and not before.is_over_budget:
        publish_over_budget(shopping_list, after, jurisdiction)
    elif before.is_over_budget and not after.is_over_budget:
        publish_within_budget(shopping_list, after, jurisdiction)
