"""Domain entities for PDF task orchestration."""
from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union


class TaskKind(str, Enum):
    """The three operations offered by the remote PDF service."""

    MERGE = "merge"
    SPLIT = "split"
    IMAGES_TO_PDF = "images-to-pdf"

    @property
    def label(self) -> str:
        """Short noun used in user-facing failure messages."""

        return _LABELS[self]

    @property
    def endpoint(self) -> str:
        return f"/api/pdf/{self.value}"

    @property
    def upload_field(self) -> str:
        """Multipart field name the remote service expects for the files."""

        return _UPLOAD_FIELDS[self]


_LABELS: dict[TaskKind, str] = {
    TaskKind.MERGE: "Merge",
    TaskKind.SPLIT: "Split",
    TaskKind.IMAGES_TO_PDF: "Conversion",
}

_UPLOAD_FIELDS: dict[TaskKind, str] = {
    TaskKind.MERGE: "files",
    TaskKind.SPLIT: "file",
    TaskKind.IMAGES_TO_PDF: "images",
}


class TaskPhase(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FailureReason(str, Enum):
    TRANSPORT = "transport"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class FileCandidate:
    """A user supplied file captured in memory."""

    name: str
    content: bytes = field(repr=False)
    content_type: str | None = None

    @classmethod
    def from_path(cls, path: Path | str, *, content_type: str | None = None) -> "FileCandidate":
        """Read ``path`` and capture it under its base name."""

        path = Path(path)
        guessed = content_type or mimetypes.guess_type(path.name)[0]
        return cls(name=path.name, content=path.read_bytes(), content_type=guessed)

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True, slots=True)
class TaskSuccess:
    kind: TaskKind
    artifact_url: str


@dataclass(frozen=True, slots=True)
class TaskFailure:
    kind: TaskKind
    message: str
    reason: FailureReason = FailureReason.TRANSPORT


TaskOutcome = Union[TaskSuccess, TaskFailure]
