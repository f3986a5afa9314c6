"""Infrastructure layer exports."""

from .pdf_service import CancellationToken, TaskCancelled, TaskExecutor

__all__ = [
    "CancellationToken",
    "TaskCancelled",
    "TaskExecutor",
]
