"""HTTP executor for the remote PDF processing service."""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, TypeVar
from urllib.parse import urlparse

import httpx

from pdfstudio.config import Settings
from pdfstudio.core.errors import TaskInFlightError
from pdfstudio.core.logging_utils import get_logger
from pdfstudio.core.schema import ArtifactResponse, TaskRequest
from pdfstudio.domain import FailureReason, TaskFailure, TaskKind, TaskOutcome, TaskSuccess

logger = get_logger()

T = TypeVar("T")


class TaskCancelled(Exception):
    """Raised inside the executor when a cancellation token trips."""


class CancellationToken:
    """Cooperative cancellation flag for one submission."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def race(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the token trips first."""

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not task.done() and not self._event.is_set():
                task.cancel()
        if task in done:
            return task.result()
        task.cancel()
        await asyncio.wait({task})
        raise TaskCancelled()


class TaskExecutor:
    """Submits one task at a time to the PDF service and maps the reply.

    ``timeout`` is a deadline in seconds for the whole request, applied with
    :func:`asyncio.wait_for` whether or not ``http_client`` is injected. An
    owned client additionally uses it as the httpx per-phase limit
    (connect, read, write, pool). ``None`` disables both.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        parsed = urlparse(base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("base_url must include scheme and host")

        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))
        self._owns_client = http_client is None
        self._in_flight = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "TaskExecutor":
        return cls(settings.backend_url, timeout=settings.timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def endpoint_url(self, kind: TaskKind) -> str:
        return f"{self._base_url}{TaskKind(kind).endpoint}"

    def resolve_artifact_url(self, download_url: str) -> str:
        """Make ``download_url`` absolute against the service base."""

        parsed = urlparse(download_url)
        if parsed.scheme and parsed.netloc:
            return download_url
        path = download_url if download_url.startswith("/") else f"/{download_url}"
        return f"{self._base_url}{path}"

    @staticmethod
    def encode_form(request: TaskRequest) -> tuple[list[tuple[str, Any]], dict[str, str]]:
        """Return the multipart ``files`` list and scalar ``data`` fields."""

        field_name = request.kind.upload_field
        files = [(field_name, (item.name, item.content, item.content_type)) for item in request.files]
        data = request.page_range.as_form_fields() if request.page_range else {}
        return files, data

    @staticmethod
    def _failure(kind: TaskKind, reason: FailureReason) -> TaskFailure:
        if reason is FailureReason.TIMED_OUT:
            message = f"{kind.label} timed out"
        elif reason is FailureReason.CANCELLED:
            message = f"{kind.label} cancelled"
        else:
            message = f"{kind.label} failed"
        return TaskFailure(kind=kind, message=message, reason=reason)

    async def _post(self, request: TaskRequest) -> ArtifactResponse:
        files, data = self.encode_form(request)
        response = await asyncio.wait_for(
            self._client.post(self.endpoint_url(request.kind), files=files, data=data or None),
            timeout=self._timeout,
        )
        response.raise_for_status()
        return ArtifactResponse.model_validate(response.json())

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    async def submit(self, request: TaskRequest, *, cancel_token: CancellationToken | None = None) -> TaskOutcome:
        if self._in_flight:
            raise TaskInFlightError("executor already has a task in flight")

        self._in_flight = True
        try:
            return await self._execute(request, cancel_token)
        finally:
            self._in_flight = False

    async def _execute(self, request: TaskRequest, cancel_token: CancellationToken | None) -> TaskOutcome:
        kind = request.kind
        if cancel_token is not None and cancel_token.cancelled:
            logger.info("%s cancelled before dispatch", kind.value)
            return self._failure(kind, FailureReason.CANCELLED)

        logger.info("submitting %s with %d file(s): %s", kind.value, len(request.files), ", ".join(request.filenames))
        try:
            if cancel_token is None:
                body = await self._post(request)
            else:
                body = await cancel_token.race(self._post(request))
        except TaskCancelled:
            logger.info("%s cancelled while in flight", kind.value)
            return self._failure(kind, FailureReason.CANCELLED)
        except asyncio.TimeoutError:
            logger.warning("%s exceeded the %ss deadline", kind.value, self._timeout)
            return self._failure(kind, FailureReason.TIMED_OUT)
        except httpx.TimeoutException as exc:
            logger.warning("%s timed out: %s", kind.value, exc)
            return self._failure(kind, FailureReason.TIMED_OUT)
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "%s rejected with HTTP %s: %s",
                kind.value,
                exc.response.status_code,
                exc.response.text[:500],
            )
            return self._failure(kind, FailureReason.TRANSPORT)
        except httpx.HTTPError as exc:
            logger.warning("%s transport error: %s", kind.value, exc)
            return self._failure(kind, FailureReason.TRANSPORT)
        except ValueError as exc:
            logger.warning("%s returned an unusable body: %s", kind.value, exc)
            return self._failure(kind, FailureReason.TRANSPORT)

        artifact_url = self.resolve_artifact_url(body.download_url)
        logger.info("%s succeeded: %s", kind.value, artifact_url)
        return TaskSuccess(kind=kind, artifact_url=artifact_url)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
