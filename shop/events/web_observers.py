"""Web-facing observers for budget events.

Subscribes to the GLOBAL_EVENT_BUS for list.over_budget and
list.within_budget and keeps a bounded in-memory buffer of recent events that
the web layer serves to polling clients.

Each event gets an auto-increment integer id (cursor) so clients can request
only newer events (since=<last_id_seen>).
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from shop.utilities.constants import MAX_ALERT_EVENTS
from shop.utilities.currency import budget_message, format_price
from .Event_Bus import GLOBAL_EVENT_BUS, LIST_OVER_BUDGET, LIST_WITHIN_BUDGET

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    lst = payload.get('list')
    summary = payload.get('summary')
    jurisdiction = payload.get('jurisdiction')
    evt = {
        'type': event_name,
        'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        'list_id': getattr(lst, 'id', None),
        'list_name': getattr(lst, 'name', ''),
        'budget': format_price(lst.budget) if getattr(lst, 'budget', None) is not None else None,
        'total': format_price(summary.total) if summary else None,
        'message': budget_message(summary.budget_variance) if summary else None,
        'province': getattr(jurisdiction, 'name', None),
    }
    with _lock:
        evt['id'] = _next_id
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_ALERT_EVENTS:
            del _events[: len(_events) - MAX_ALERT_EVENTS]
    logger.info("Budget alert %s for list %s: %s", event_name, evt['list_name'], evt['message'])


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    GLOBAL_EVENT_BUS.subscribe(LIST_OVER_BUDGET, _record)
    GLOBAL_EVENT_BUS.subscribe(LIST_WITHIN_BUDGET, _record)
    _started = True


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), or the whole buffer when since is None.

    next_cursor is the largest id seen so the client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


def clear():
    with _lock:
        _events.clear()


__all__ = ['start', 'get_events', 'clear']
