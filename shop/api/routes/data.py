from datetime import datetime

from fastapi import APIRouter, Depends, Response

from shop.api.dependencies import get_store
from shop.events import web_observers
from shop.infra.store import ShopStore
from shop.utilities.export_import import DataExporter

router = APIRouter(prefix="/api/data", tags=["data"])


@router.post("/reset")
def reset_data(store: ShopStore = Depends(get_store)):
    """Delete every list, item and category. Preferences stay."""
    store.reset_all()
    web_observers.clear()
    return {"ok": True}


@router.get("/export")
def export_data(store: ShopStore = Depends(get_store)):
    content = DataExporter(store).export_zip_bytes()
    filename = f"shopsense_backup_{datetime.now().strftime('%Y%m%d_%H%M%S')}.zip"
    return Response(content=content, media_type="application/zip",
                    headers={"Content-Disposition": f"attachment; filename={filename}"})
