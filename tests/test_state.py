from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from pdfstudio.core.errors import InvalidTransitionError
from pdfstudio.core.state import (
    ArtifactDismissed,
    OutcomeReceived,
    SessionState,
    SubmitStarted,
    ToolSelected,
    apply_outcome,
    begin_submit,
    dismiss_artifact,
    dismiss_error,
    select_tool,
    transition,
)
from pdfstudio.domain import TaskFailure, TaskKind, TaskPhase, TaskSuccess

ARTIFACT = "http://pdf.test/files/out.pdf"


def _succeeded(kind: TaskKind = TaskKind.MERGE) -> SessionState:
    state = begin_submit(select_tool(SessionState(), kind), kind)
    return apply_outcome(state, TaskSuccess(kind=kind, artifact_url=ARTIFACT))


def _failed(kind: TaskKind = TaskKind.SPLIT) -> SessionState:
    state = begin_submit(select_tool(SessionState(), kind), kind)
    return apply_outcome(state, TaskFailure(kind=kind, message="Split failed"))


def test_initial_state_is_idle():
    state = SessionState()

    assert state.phase is TaskPhase.IDLE
    assert state.active_tool is None
    assert state.projection() == {
        "active_tool": None,
        "phase": "idle",
        "busy": False,
        "artifact_url": None,
        "error_message": None,
        "submitting_kind": None,
    }


def test_selecting_same_tool_twice_keeps_result():
    state = _succeeded()

    again = select_tool(state, TaskKind.MERGE)

    assert again == state
    assert again.artifact_url == ARTIFACT


def test_switching_tool_clears_result_and_error():
    switched = select_tool(_succeeded(), TaskKind.SPLIT)
    assert switched.active_tool is TaskKind.SPLIT
    assert switched.artifact_url is None
    assert switched.phase is TaskPhase.IDLE

    switched = select_tool(_failed(), TaskKind.MERGE)
    assert switched.error_message is None
    assert switched.phase is TaskPhase.IDLE


def test_switching_tool_does_not_stop_submission():
    state = begin_submit(select_tool(SessionState(), TaskKind.MERGE), TaskKind.MERGE)

    switched = select_tool(state, TaskKind.SPLIT)

    assert switched.phase is TaskPhase.SUBMITTING
    assert switched.submitting_kind is TaskKind.MERGE


def test_begin_submit_clears_previous_error_and_blocks_second_submit():
    state = begin_submit(_failed(), TaskKind.SPLIT)

    assert state.phase is TaskPhase.SUBMITTING
    assert state.error_message is None
    assert state.is_busy
    with pytest.raises(InvalidTransitionError):
        begin_submit(state, TaskKind.SPLIT)


def test_begin_submit_activates_tool_when_none_selected():
    state = begin_submit(SessionState(), TaskKind.IMAGES_TO_PDF)

    assert state.active_tool is TaskKind.IMAGES_TO_PDF


def test_outcome_requires_submission():
    with pytest.raises(InvalidTransitionError):
        apply_outcome(SessionState(), TaskSuccess(kind=TaskKind.MERGE, artifact_url=ARTIFACT))


def test_success_and_failure_outcomes():
    assert _succeeded().phase is TaskPhase.SUCCEEDED
    assert _succeeded().artifact_url == ARTIFACT

    failed = _failed()
    assert failed.phase is TaskPhase.FAILED
    assert failed.error_message == "Split failed"
    assert failed.artifact_url is None


def test_stale_outcome_from_other_tool_is_ignored():
    state = begin_submit(select_tool(SessionState(), TaskKind.MERGE), TaskKind.MERGE)
    state = select_tool(state, TaskKind.SPLIT)

    state = apply_outcome(state, TaskSuccess(kind=TaskKind.MERGE, artifact_url=ARTIFACT))

    assert state.phase is TaskPhase.IDLE
    assert state.artifact_url is None
    assert state.active_tool is TaskKind.SPLIT
    assert state.submitting_kind is None


def test_dismiss_artifact_returns_to_idle_and_stays_cleared():
    state = dismiss_artifact(_succeeded())

    assert state.phase is TaskPhase.IDLE
    assert state.artifact_url is None

    state = select_tool(state, TaskKind.MERGE)
    state = select_tool(state, TaskKind.SPLIT)
    assert state.artifact_url is None


def test_dismiss_error_returns_to_idle():
    state = dismiss_error(_failed())

    assert state.phase is TaskPhase.IDLE
    assert state.error_message is None


def test_transition_dispatches_events():
    state = SessionState()
    for event in (
        ToolSelected(TaskKind.MERGE),
        SubmitStarted(TaskKind.MERGE),
        OutcomeReceived(TaskSuccess(kind=TaskKind.MERGE, artifact_url=ARTIFACT)),
        ArtifactDismissed(),
    ):
        state = transition(state, event)

    assert state == SessionState(active_tool=TaskKind.MERGE)

    with pytest.raises(TypeError):
        transition(state, object())
