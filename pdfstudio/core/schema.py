from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pdfstudio.domain import FileCandidate, TaskKind


class PageRange(BaseModel):
    """Inclusive, 1-based page range; ordering is checked by the remote service."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=1)
    end: int = Field(ge=1)

    def as_form_fields(self) -> dict[str, str]:
        return {"start_page": str(self.start), "end_page": str(self.end)}


class TaskRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: TaskKind
    files: tuple[FileCandidate, ...] = Field(min_length=1)
    page_range: PageRange | None = None

    @model_validator(mode="after")
    def _check_kind_inputs(self) -> "TaskRequest":
        if self.kind is TaskKind.SPLIT:
            if self.page_range is None:
                raise ValueError("split requires a page range")
            if len(self.files) != 1:
                raise ValueError("split takes exactly one file")
        elif self.page_range is not None:
            raise ValueError(f"{self.kind.value} does not take a page range")
        return self

    @property
    def filenames(self) -> list[str]:
        return [item.name for item in self.files]


class ArtifactResponse(BaseModel):
    """Body returned by every endpoint of the remote PDF service."""

    download_url: str = Field(min_length=1)
