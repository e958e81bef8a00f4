"""In-process change notifications for standing event streams.

Writes happen on worker threads (sync views, ``database_sync_to_async``);
subscribers wait on the event loop. ``publish`` hands the wake-up to each
subscriber's loop with ``call_soon_threadsafe``. Delivery is best effort:
sessions keep their fixed poll interval, a wake-up only makes the next
snapshot arrive sooner.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import defaultdict
from collections.abc import Iterable

logger = logging.getLogger(__name__)

ADMIN_TOPIC = "admin:pending"


def student_topic(sid: str) -> str:
    return f"student:{sid}"


class Subscription:
    def __init__(self, topics: Iterable[str], loop: asyncio.AbstractEventLoop):
        self.topics = tuple(topics)
        self.loop = loop
        self.event = asyncio.Event()

    def notify(self) -> None:
        self.loop.call_soon_threadsafe(self.event.set)

    async def wait(self, timeout: float) -> bool:
        """Wait for a publish or ``timeout`` seconds; True when woken early."""

        try:
            await asyncio.wait_for(self.event.wait(), timeout)
        except TimeoutError:
            return False
        self.event.clear()
        return True


class ChangeBus:
    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: dict[str, set[Subscription]] = defaultdict(set)

    def subscribe(self, topics: Iterable[str]) -> Subscription:
        subscription = Subscription(topics, asyncio.get_running_loop())
        with self._lock:
            for topic in subscription.topics:
                self._subscribers[topic].add(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            for topic in subscription.topics:
                subscribers = self._subscribers.get(topic)
                if subscribers is None:
                    continue
                subscribers.discard(subscription)
                if not subscribers:
                    del self._subscribers[topic]

    def subscriber_count(self, topic: str) -> int:
        with self._lock:
            return len(self._subscribers.get(topic, ()))

    def publish(self, *topics: str) -> int:
        with self._lock:
            targets = {sub for topic in topics for sub in self._subscribers.get(topic, ())}
        delivered = 0
        for subscription in targets:
            try:
                subscription.notify()
            except RuntimeError:
                # Loop already closed; the session's own cleanup unsubscribes it.
                logger.debug("Dropping wake-up for closed loop %r", subscription.topics)
                continue
            delivered += 1
        return delivered


bus = ChangeBus()
