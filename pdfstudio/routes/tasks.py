from __future__ import annotations

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from pdfstudio.application import get_session_service
from pdfstudio.core.errors import TaskInFlightError, ValidationError
from pdfstudio.domain import FileCandidate, TaskKind

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/policies")
async def list_policies() -> dict:
    """Expose the accepted suffixes so a dropzone can set its ``accept`` attribute."""
    service = get_session_service()
    return {"items": {kind.value: service.policy(kind).accept_string for kind in TaskKind}}


@router.post("/{kind}")
async def submit_task(
    kind: str,
    files: list[UploadFile] = File(...),
    start_page: str | None = Form(default=None),
    end_page: str | None = Form(default=None),
) -> dict:
    """Run one task on the uploaded files and return the resulting session."""
    try:
        task_kind = TaskKind(kind)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"unknown task kind: {kind}") from None

    candidates: list[FileCandidate] = []
    for upload in files:
        try:
            if not upload.filename:
                raise HTTPException(status_code=400, detail="Uploaded file must have a filename")
            content = await upload.read()
            candidates.append(
                FileCandidate(name=upload.filename, content=content, content_type=upload.content_type)
            )
        finally:
            await upload.close()

    params = None
    if start_page is not None or end_page is not None:
        params = {"start": start_page, "end": end_page}

    service = get_session_service()
    try:
        await service.submit(task_kind, candidates, params)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.to_dict()) from exc
    except TaskInFlightError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return service.snapshot()
