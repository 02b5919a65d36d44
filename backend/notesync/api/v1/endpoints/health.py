from __future__ import annotations

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from notesync.config import settings

router = APIRouter()


@router.get("/")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "notesync-api",
            "version": "0.1.0"
        }
    )


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness check endpoint."""
    module = getattr(request.app.state, "notes_module", None)
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready" if module is not None and module.started else "starting",
            "notes_channel": settings.notes_channel,
            "api_prefix": settings.api_prefix
        }
    )
