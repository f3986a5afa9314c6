from __future__ import annotations

from typing import Any, Mapping, Sequence

import pydantic

from pdfstudio.core.errors import ValidationError, ValidationReason
from pdfstudio.core.schema import PageRange, TaskRequest
from pdfstudio.domain import FileCandidate, TaskKind


def _coerce_range(params: PageRange | Mapping[str, Any]) -> PageRange:
    if isinstance(params, PageRange):
        return params
    try:
        return PageRange(start=params.get("start"), end=params.get("end"))
    except pydantic.ValidationError as exc:
        detail = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ValidationError(ValidationReason.INVALID_RANGE, f"invalid page range ({detail})") from exc


def build_request(
    kind: TaskKind,
    files: Sequence[FileCandidate],
    params: PageRange | Mapping[str, Any] | None = None,
) -> TaskRequest:
    """Assemble a :class:`TaskRequest` for ``kind`` from an accepted selection.

    Split keeps only the first file of the selection. ``params`` is ignored for
    kinds that do not take a page range.
    """

    kind = TaskKind(kind)
    if not files:
        raise ValidationError(ValidationReason.EMPTY_SELECTION, "no files selected")

    if kind is TaskKind.SPLIT:
        if params is None:
            raise ValidationError(ValidationReason.MISSING_RANGE, "split requires a page range")
        return TaskRequest(kind=kind, files=(files[0],), page_range=_coerce_range(params))

    return TaskRequest(kind=kind, files=tuple(files))
