"""Domain layer definitions."""

from .tasks import (
    FailureReason,
    FileCandidate,
    TaskFailure,
    TaskKind,
    TaskOutcome,
    TaskPhase,
    TaskSuccess,
)

__all__ = [
    "FailureReason",
    "FileCandidate",
    "TaskFailure",
    "TaskKind",
    "TaskOutcome",
    "TaskPhase",
    "TaskSuccess",
]
