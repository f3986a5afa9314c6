"""Session state and its transitions.

The state is an immutable value. Every change goes through one of the
transition functions below, each taking the current state and returning the
next one, so a presentation layer can hold on to a snapshot safely.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Union

from pdfstudio.core.errors import InvalidTransitionError
from pdfstudio.core.logging_utils import get_logger
from pdfstudio.domain import TaskFailure, TaskKind, TaskOutcome, TaskPhase, TaskSuccess

logger = get_logger()


@dataclass(frozen=True, slots=True)
class SessionState:
    active_tool: TaskKind | None = None
    phase: TaskPhase = TaskPhase.IDLE
    artifact_url: str | None = None
    error_message: str | None = None
    submitting_kind: TaskKind | None = None

    @property
    def is_busy(self) -> bool:
        return self.phase is TaskPhase.SUBMITTING

    def projection(self) -> dict[str, Any]:
        """Read-only view handed to the presentation layer."""

        return {
            "active_tool": self.active_tool.value if self.active_tool else None,
            "phase": self.phase.value,
            "busy": self.is_busy,
            "artifact_url": self.artifact_url,
            "error_message": self.error_message,
            "submitting_kind": self.submitting_kind.value if self.submitting_kind else None,
        }


@dataclass(frozen=True, slots=True)
class ToolSelected:
    kind: TaskKind


@dataclass(frozen=True, slots=True)
class SubmitStarted:
    kind: TaskKind


@dataclass(frozen=True, slots=True)
class OutcomeReceived:
    outcome: TaskOutcome


@dataclass(frozen=True, slots=True)
class ArtifactDismissed:
    pass


@dataclass(frozen=True, slots=True)
class ErrorDismissed:
    pass


SessionEvent = Union[ToolSelected, SubmitStarted, OutcomeReceived, ArtifactDismissed, ErrorDismissed]


def select_tool(state: SessionState, kind: TaskKind) -> SessionState:
    """Activate ``kind``; switching tools clears the previous result.

    A task that is still submitting keeps running.
    """

    kind = TaskKind(kind)
    if state.active_tool is kind:
        return state
    phase = state.phase
    if phase in (TaskPhase.SUCCEEDED, TaskPhase.FAILED):
        phase = TaskPhase.IDLE
    return replace(state, active_tool=kind, phase=phase, artifact_url=None, error_message=None)


def begin_submit(state: SessionState, kind: TaskKind) -> SessionState:
    kind = TaskKind(kind)
    if state.phase is TaskPhase.SUBMITTING:
        raise InvalidTransitionError(
            f"cannot submit {kind.value}: {state.submitting_kind.value if state.submitting_kind else 'a task'} is in flight"
        )
    return replace(
        state,
        active_tool=state.active_tool or kind,
        phase=TaskPhase.SUBMITTING,
        submitting_kind=kind,
        artifact_url=None,
        error_message=None,
    )


def apply_outcome(state: SessionState, outcome: TaskOutcome) -> SessionState:
    if state.phase is not TaskPhase.SUBMITTING:
        raise InvalidTransitionError(f"no task in flight (phase is {state.phase.value})")

    if state.active_tool is not outcome.kind:
        # The user moved to another tool while this one was running.
        logger.info(
            "ignoring %s outcome; active tool is %s",
            outcome.kind.value,
            state.active_tool.value if state.active_tool else "none",
        )
        return replace(state, phase=TaskPhase.IDLE, submitting_kind=None)

    if isinstance(outcome, TaskSuccess):
        return replace(
            state,
            phase=TaskPhase.SUCCEEDED,
            artifact_url=outcome.artifact_url,
            error_message=None,
            submitting_kind=None,
        )
    if isinstance(outcome, TaskFailure):
        return replace(
            state,
            phase=TaskPhase.FAILED,
            artifact_url=None,
            error_message=outcome.message,
            submitting_kind=None,
        )
    raise TypeError(f"unsupported outcome: {outcome!r}")


def dismiss_artifact(state: SessionState) -> SessionState:
    phase = TaskPhase.IDLE if state.phase is TaskPhase.SUCCEEDED else state.phase
    return replace(state, phase=phase, artifact_url=None)


def dismiss_error(state: SessionState) -> SessionState:
    phase = TaskPhase.IDLE if state.phase is TaskPhase.FAILED else state.phase
    return replace(state, phase=phase, error_message=None)


def transition(state: SessionState, event: SessionEvent) -> SessionState:
    """Apply ``event`` to ``state`` and return the next state."""

    if isinstance(event, ToolSelected):
        return select_tool(state, event.kind)
    if isinstance(event, SubmitStarted):
        return begin_submit(state, event.kind)
    if isinstance(event, OutcomeReceived):
        return apply_outcome(state, event.outcome)
    if isinstance(event, ArtifactDismissed):
        return dismiss_artifact(state)
    if isinstance(event, ErrorDismissed):
        return dismiss_error(state)
    raise TypeError(f"unsupported session event: {event!r}")
