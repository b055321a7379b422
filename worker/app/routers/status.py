# worker/app/routers/status.py
from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from worker.app.config import settings
from worker.app.telemetry import telemetry

router = APIRouter()


@router.get("/status")
async def status():
    """
    Returns service settings summary + telemetry counters.
    """
    stats = telemetry.get_stats()
    data = {
        "ok": True,
        "pipeline_version": settings.PIPELINE_VERSION,
        "defaults": {
            "list_length": settings.DEFAULT_LIST_LENGTH,
            "max_display_lines": settings.MAX_DISPLAY_LINES,
            "max_input_bytes": settings.MAX_INPUT_BYTES,
        },
        "auth_enabled": bool(settings.WORKER_AUTH_TOKEN.strip()),
        **stats,
    }
    return JSONResponse(data)
