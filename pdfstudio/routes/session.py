from __future__ import annotations

from fastapi import APIRouter, HTTPException

from pdfstudio.application import get_session_service
from pdfstudio.domain import TaskKind

router = APIRouter(prefix="/session", tags=["session"])


@router.get("")
async def get_session() -> dict:
    return get_session_service().snapshot()


@router.post("/tool")
async def select_tool(payload: dict) -> dict:
    tool = payload.get("tool")
    if not tool:
        raise HTTPException(status_code=400, detail="tool is required")
    try:
        kind = TaskKind(tool)
    except ValueError:
        allowed = ", ".join(item.value for item in TaskKind)
        raise HTTPException(status_code=400, detail=f"tool must be one of: {allowed}") from None
    service = get_session_service()
    service.select_tool(kind)
    return service.snapshot()


@router.post("/dismiss-artifact")
async def dismiss_artifact() -> dict:
    service = get_session_service()
    service.dismiss_artifact()
    return service.snapshot()


@router.post("/dismiss-error")
async def dismiss_error() -> dict:
    service = get_session_service()
    service.dismiss_error()
    return service.snapshot()


@router.post("/cancel")
async def cancel_task() -> dict:
    """Request cancellation of the in-flight task, if any."""
    service = get_session_service()
    cancelled = service.cancel()
    return {"cancelled": cancelled, **service.snapshot()}
