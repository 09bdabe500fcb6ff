"""Backup export, restore and reset routes."""

import logging

from core.dependencies import get_backup_codec, get_store
from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from schemas import ImportSummary
from services import BackupCodec, PersistentStore

router = APIRouter()
logger = logging.getLogger("BackupRouter")


@router.get("/export")
async def export_backup(codec: BackupCodec = Depends(get_backup_codec)):
    """Download the whole store as a JSON snapshot."""
    body = await codec.export_json()
    return Response(
        content=body.encode("utf-8"),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{codec.backup_filename()}"'},
    )


@router.post("/import", response_model=ImportSummary)
async def import_backup(request: Request, codec: BackupCodec = Depends(get_backup_codec)):
    """
    Replace everything with the uploaded snapshot.

    The body is the raw snapshot JSON. It is validated in full before the
    store is touched.
    """
    raw = await request.body()
    return await codec.import_snapshot(raw)


@router.post("/reset")
async def reset_store(store: PersistentStore = Depends(get_store)):
    """Delete all settings, memories and plans."""
    await store.clear_all()
    logger.warning("Store reset: all data deleted")
    return {"message": "All data deleted"}
