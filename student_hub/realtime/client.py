"""Consumer side of the event streams with automatic reconnection.

``SnapshotStreamClient`` keeps the last applied snapshot and the connection
state the dashboards render (items, loading, error, is_live). A transport
failure closes the connection and retries with exponential backoff; a 401
or 403 answer stops the client for good.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace
from enum import Enum
from typing import Any

import httpx

from student_hub.achievements.variants import VARIANT_INFO
from student_hub.achievements.variants import variant_for_collection

logger = logging.getLogger(__name__)

TOKEN_MISSING = "Authentication token not found. Please log in again."
CONNECTION_LOST = "Connection lost. Retrying..."
AUTH_FAILURE_CODES = {401, 403}


class ConnectionStatus(str, Enum):
    CONNECTING = "connecting"
    LIVE = "live"
    RECONNECTING = "reconnecting"
    STOPPED = "stopped"


@dataclass(frozen=True)
class StreamTarget:
    path: str
    event: str
    items_key: str
    label: str


def stream_target(kind: str, sid: str | None = None) -> StreamTarget:
    """Where a dashboard of ``kind`` listens and which event carries its data."""

    if kind == "pending":
        return StreamTarget(
            "/api/admin/pending-documents/stream",
            "pending-documents",
            "documents",
            "pending documents",
        )
    if kind == "academics":
        if not sid:
            msg = "The academics stream needs a student id"
            raise ValueError(msg)
        return StreamTarget(
            f"/api/student/academics/stream/{sid}",
            "academics-update",
            "records",
            "academics",
        )
    info = VARIANT_INFO[variant_for_collection(kind)]
    return StreamTarget(
        f"/api/student/{info.collection}/stream",
        info.event,
        "documents",
        info.collection,
    )


@dataclass
class StreamState:
    items: list[Any] = field(default_factory=list)
    loading: bool = True
    error: str | None = None
    is_live: bool = False
    snapshot: dict[str, Any] | None = None


class StreamRejectedError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class StreamClosedError(Exception):
    """The server ended the stream; treated like a transport failure."""


class SnapshotStreamClient:
    """
    Usage:
        client = SnapshotStreamClient(base_url, stream_target("skills"), token=token)
        await client.run()          # until stop() or an auth rejection
    """

    def __init__(  # noqa: PLR0913
        self,
        base_url: str,
        target: StreamTarget,
        *,
        token: str | None,
        on_update: Callable[[StreamState], None] | None = None,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.target = target
        self.token = token
        self.on_update = on_update
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.max_retries = max_retries
        self.transport = transport
        self.state = StreamState()
        self.status = ConnectionStatus.CONNECTING
        self.retry_count = 0
        self._stopped = asyncio.Event()

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.target.path}"

    def _get_backoff_delay(self) -> float:
        """Calculate exponential backoff delay"""
        delay = self.base_delay * (2**self.retry_count)
        return min(delay, self.max_delay)

    def stop(self) -> None:
        self.status = ConnectionStatus.STOPPED
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def _set_state(self, **changes) -> None:
        if self.stopped:
            return
        self.state = replace(self.state, **changes)
        if self.on_update is not None:
            self.on_update(self.state)

    async def run(self) -> StreamState:
        if not self.token:
            self._set_state(error=TOKEN_MISSING, loading=False, is_live=False)
            self.stop()
            return self.state

        while not self.stopped:
            try:
                await self._listen_until_stopped()
            except StreamRejectedError as exc:
                logger.warning("Stream %s rejected: %s", self.target.path, exc)
                self._set_state(error=exc.message, loading=False, is_live=False)
                self.stop()
                break
            except (httpx.TransportError, StreamClosedError) as exc:
                if self.stopped:
                    break
                self.status = ConnectionStatus.RECONNECTING
                self._set_state(is_live=False, error=CONNECTION_LOST)
                self.retry_count += 1
                if self.max_retries is not None and self.retry_count > self.max_retries:
                    logger.error("Giving up on %s after %d retries", self.url, self.max_retries)
                    self.stop()
                    break
                delay = self._get_backoff_delay()
                logger.info(
                    "Connection to %s lost (%s). Retrying in %.1fs (attempt %d)",
                    self.url,
                    exc,
                    delay,
                    self.retry_count,
                )
                await self._sleep(delay)
        return self.state

    async def _sleep(self, delay: float) -> None:
        try:
            await asyncio.wait_for(self._stopped.wait(), delay)
        except TimeoutError:
            return

    async def _listen_until_stopped(self) -> None:
        listen = asyncio.ensure_future(self._listen())
        stopped = asyncio.ensure_future(self._stopped.wait())
        try:
            done, _pending = await asyncio.wait(
                {listen, stopped}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in (listen, stopped):
                if not task.done():
                    task.cancel()
            await asyncio.gather(listen, stopped, return_exceptions=True)
        if listen in done:
            listen.result()

    async def _listen(self) -> None:
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "text/event-stream",
        }
        async with httpx.AsyncClient(timeout=None, transport=self.transport) as client:
            async with client.stream("GET", self.url, headers=headers) as response:
                if response.status_code in AUTH_FAILURE_CODES:
                    await response.aread()
                    raise StreamRejectedError(
                        response.status_code, _error_message(response)
                    )
                if response.status_code != httpx.codes.OK:
                    msg = f"Unexpected status {response.status_code}"
                    raise StreamClosedError(msg)

                self.status = ConnectionStatus.LIVE
                event, data_lines = "message", []
                async for line in response.aiter_lines():
                    if self.stopped:
                        return
                    if line == "":
                        if data_lines:
                            self.handle_event(event, "\n".join(data_lines))
                        event, data_lines = "message", []
                    elif line.startswith(":"):
                        continue
                    elif line.startswith("event:"):
                        event = line[len("event:") :].strip()
                    elif line.startswith("data:"):
                        data_lines.append(line[len("data:") :].removeprefix(" "))
        msg = "Server closed the stream"
        raise StreamClosedError(msg)

    def handle_event(self, event: str, data: str) -> None:
        """Apply one dispatched event to the local state."""

        if self.stopped:
            return
        if event == "error":
            self._set_state(error=_server_error(data))
            return
        if event != self.target.event:
            logger.debug("Ignoring %s event on %s", event, self.target.path)
            return
        try:
            snapshot = json.loads(data)
            items = snapshot[self.target.items_key]
            if not isinstance(items, list):
                raise TypeError(self.target.items_key)
        except (ValueError, KeyError, TypeError):
            logger.exception("Bad %s payload on %s", event, self.target.path)
            self._set_state(error=f"Failed to parse {self.target.label} data")
            return
        self.retry_count = 0
        self._set_state(
            items=items,
            snapshot=snapshot,
            loading=False,
            error=None,
            is_live=True,
        )


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"Stream refused with status {response.status_code}"
    if isinstance(body, dict):
        return str(body.get("error") or body.get("detail") or response.status_code)
    return str(body)


def _server_error(data: str) -> str:
    try:
        body = json.loads(data)
    except ValueError:
        return data
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return data
