from fastapi import FastAPI, Query
from typing import Optional
import logging

from shop.api.routes import calculator, categories, data, items, lists, settings
from shop.events.web_observers import start as start_event_observers, get_events as get_web_events

# Logging
logger = logging.getLogger("shop_app")

app = FastAPI(title="ShopSense Shopping List & Sales Tax API")

# Include routers
app.include_router(settings.router)
app.include_router(lists.router)
app.include_router(items.router)
app.include_router(categories.router)
app.include_router(calculator.router)
app.include_router(data.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for budget alerts when the app starts."""
    start_event_observers()
    logger.info("Web observers for budget events started")


@app.get('/api/alerts')
def api_budget_alerts(
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value")
):
    """
    Return recent budget alert events (list went over budget / back within it).

    Client polling strategy:
        1. First call without 'since' to load the current backlog.
        2. Store 'next_cursor' from response.
        3. Subsequent polls: /api/alerts?since=<next_cursor>
    """
    return get_web_events(since)
