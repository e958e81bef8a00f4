"""One subscriber session per standing event-stream connection.

A session owns exactly two tasks, the poll loop and the heartbeat loop,
created by ``open()`` and cancelled by ``close()``. Sessions share nothing
except the change bus, which can only wake a poll loop early.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from collections.abc import Awaitable
from collections.abc import Callable
from typing import Any

from django.conf import settings

from .bus import ChangeBus
from .bus import Subscription
from .bus import bus as default_bus
from .notifier import SnapshotScope
from .notifier import build_snapshot
from .sse import HEARTBEAT
from .sse import format_event

logger = logging.getLogger(__name__)

# Chunks held for a consumer that is not reading; older ones are dropped.
MAX_QUEUED_CHUNKS = 8

SnapshotFn = Callable[[SnapshotScope, str | None], Awaitable[dict[str, Any]]]


class SubscriberSession:
    def __init__(  # noqa: PLR0913
        self,
        scope: SnapshotScope,
        *,
        base_url: str | None = None,
        poll_interval: float | None = None,
        heartbeat_interval: float | None = None,
        snapshot: SnapshotFn = build_snapshot,
        change_bus: ChangeBus | None = None,
        max_queued: int = MAX_QUEUED_CHUNKS,
    ):
        self.scope = scope
        self.base_url = settings.PUBLIC_BASE_URL if base_url is None else base_url
        self.poll_interval = (
            settings.SUBMISSION_POLL_INTERVAL if poll_interval is None else poll_interval
        )
        self.heartbeat_interval = (
            settings.SUBMISSION_HEARTBEAT_INTERVAL
            if heartbeat_interval is None
            else heartbeat_interval
        )
        self._snapshot = snapshot
        self._bus = default_bus if change_bus is None else change_bus
        self._subscription: Subscription | None = None
        self._tasks: list[asyncio.Task] = []
        self._closed = False
        self.queue: asyncio.Queue[str] = asyncio.Queue(maxsize=max_queued)
        self.ticks = 0

    @property
    def is_open(self) -> bool:
        return bool(self._tasks) and not self._closed

    async def open(self) -> None:
        """Push tick 0, then start the poll and heartbeat timers."""

        if self._tasks or self._closed:
            msg = "Session already opened"
            raise RuntimeError(msg)
        logger.info("Stream opened for %s", self.scope)
        self._subscription = self._bus.subscribe(self.scope.topics)
        await self.tick()
        self._tasks = [
            asyncio.create_task(self._poll_loop(), name=f"poll:{self.scope}"),
            asyncio.create_task(self._heartbeat_loop(), name=f"heartbeat:{self.scope}"),
        ]

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        if self._subscription is not None:
            self._bus.unsubscribe(self._subscription)
            self._subscription = None
        logger.info("Stream closed for %s after %d tick(s)", self.scope, self.ticks)

    async def tick(self) -> None:
        """Compute one full snapshot and queue it; a failure queues an error event."""

        try:
            snapshot = await self._snapshot(self.scope, self.base_url)
        except Exception:
            logger.exception("Snapshot failed for %s", self.scope)
            self._push(format_event("error", {"error": self.scope.failure_message}))
            return
        self.ticks += 1
        logger.debug(
            "Tick %d for %s: %s",
            self.ticks,
            self.scope,
            snapshot.get("totalCount", snapshot.get("count")),
        )
        self._push(format_event(self.scope.event, snapshot))

    async def _poll_loop(self) -> None:
        while True:
            woken = await self._subscription.wait(self.poll_interval)
            if woken:
                logger.debug("Change published for %s", self.scope)
            await self.tick()

    async def _heartbeat_loop(self) -> None:
        while True:
            await asyncio.sleep(self.heartbeat_interval)
            self._push(HEARTBEAT)

    def _push(self, chunk: str) -> None:
        if self._closed:
            return
        if self.queue.full():
            # Every snapshot replaces the previous one, so the oldest chunk goes.
            self.queue.get_nowait()
            logger.debug("Dropped a queued chunk for slow consumer on %s", self.scope)
        self.queue.put_nowait(chunk)

    async def stream(self) -> AsyncIterator[str]:
        """Open, yield queued chunks until the consumer goes away, then close."""

        try:
            await self.open()
            while True:
                yield await self.queue.get()
        finally:
            await self.close()

    async def __aenter__(self) -> SubscriberSession:
        await self.open()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
