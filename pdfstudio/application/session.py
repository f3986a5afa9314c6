"""Application service owning the UI session."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from pdfstudio.config import load_settings
from pdfstudio.core import state as transitions
from pdfstudio.core.acceptance import DEFAULT_POLICIES, AcceptancePolicy, AcceptanceResult, partition
from pdfstudio.core.builder import build_request
from pdfstudio.core.errors import TaskInFlightError
from pdfstudio.core.logging_utils import get_logger
from pdfstudio.core.schema import PageRange
from pdfstudio.core.state import SessionEvent, SessionState
from pdfstudio.domain import FileCandidate, TaskFailure, TaskKind
from pdfstudio.infrastructure import CancellationToken, TaskExecutor

logger = get_logger()


class SessionService:
    """Holds the session state and runs tasks against it.

    All state changes go through :func:`pdfstudio.core.state.transition`.
    Only one task may be submitting at a time; the phase gate below refuses
    a second submission before anything is sent.
    """

    def __init__(
        self,
        executor: TaskExecutor,
        policies: Mapping[TaskKind, AcceptancePolicy] | None = None,
    ) -> None:
        self._executor = executor
        self._policies = dict(policies or DEFAULT_POLICIES)
        self._state = SessionState()
        self._cancel_token: CancellationToken | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def executor(self) -> TaskExecutor:
        return self._executor

    def snapshot(self) -> dict[str, Any]:
        return self._state.projection()

    def policy(self, kind: TaskKind) -> AcceptancePolicy:
        return self._policies[TaskKind(kind)]

    def _dispatch(self, event: SessionEvent) -> SessionState:
        self._state = transitions.transition(self._state, event)
        return self._state

    # ------------------------------------------------------------------
    # user commands
    # ------------------------------------------------------------------
    def select_tool(self, kind: TaskKind) -> SessionState:
        return self._dispatch(transitions.ToolSelected(TaskKind(kind)))

    def dismiss_artifact(self) -> SessionState:
        return self._dispatch(transitions.ArtifactDismissed())

    def dismiss_error(self) -> SessionState:
        return self._dispatch(transitions.ErrorDismissed())

    def accept_files(self, kind: TaskKind, candidates: Iterable[FileCandidate]) -> AcceptanceResult:
        return partition(candidates, self.policy(kind))

    def cancel(self) -> bool:
        """Ask the in-flight task to stop. Returns ``False`` when idle."""

        if self._cancel_token is None or not self._state.is_busy:
            return False
        self._cancel_token.cancel()
        return True

    async def submit(
        self,
        kind: TaskKind,
        candidates: Iterable[FileCandidate],
        params: PageRange | Mapping[str, Any] | None = None,
    ) -> SessionState:
        """Filter, build and run a task, then fold its outcome into the state.

        Raises :class:`~pdfstudio.core.errors.ValidationError` without touching
        the state when the selection is unusable.
        """

        kind = TaskKind(kind)
        if self._state.is_busy:
            raise TaskInFlightError("a task is already submitting")

        selection = self.accept_files(kind, candidates)
        if selection.has_rejections:
            logger.info(
                "%d file(s) ignored for %s: %s",
                len(selection.rejected),
                kind.value,
                ", ".join(item.name for item in selection.rejected),
            )
        request = build_request(kind, selection.accepted, params)

        self.select_tool(kind)
        self._dispatch(transitions.SubmitStarted(kind))
        token = CancellationToken()
        self._cancel_token = token
        try:
            outcome = await self._executor.submit(request, cancel_token=token)
        except BaseException:
            self._dispatch(transitions.OutcomeReceived(TaskFailure(kind=kind, message=f"{kind.label} failed")))
            raise
        finally:
            self._cancel_token = None
        return self._dispatch(transitions.OutcomeReceived(outcome))


_service: SessionService | None = None


def get_session_service() -> SessionService:
    """Return the process-wide session service, creating it from settings."""

    global _service
    if _service is None:
        _service = SessionService(TaskExecutor.from_settings(load_settings()))
    return _service


def configure_session_service(service: SessionService | None) -> None:
    """Install the session service used by the command API."""

    global _service
    _service = service


def reset_session_state() -> None:
    """Drop the installed session service (used in tests)."""

    global _service
    _service = None
