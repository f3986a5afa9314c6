"""Exception hierarchy for the orchestration layer."""
from __future__ import annotations

from enum import Enum


class ValidationReason(str, Enum):
    EMPTY_SELECTION = "empty_selection"
    MISSING_RANGE = "missing_range"
    INVALID_RANGE = "invalid_range"


class PdfStudioError(Exception):
    """Base class for errors raised by the orchestration layer."""


class ValidationError(PdfStudioError):
    """Raised when a task request cannot be built from the user's input."""

    def __init__(self, reason: ValidationReason, message: str = "") -> None:
        self.reason = reason
        self.message = message or reason.value.replace("_", " ")
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"reason": self.reason.value, "message": self.message}


class InvalidTransitionError(PdfStudioError):
    """Raised when a session event is not allowed in the current phase."""


class TaskInFlightError(PdfStudioError):
    """Raised when a task is submitted while another one is unresolved."""
