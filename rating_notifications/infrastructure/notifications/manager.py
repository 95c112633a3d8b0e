"""Live delivery channel for newly created notifications.

Each connected viewer owns one :class:`Subscription` scoped to its recipient id.
Publishing only reaches subscriptions that are open at that moment; anything
created while a viewer is away is recovered through the regular list endpoint.
"""

from __future__ import annotations

import asyncio
import copy
import logging
import threading
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, DefaultDict, Set

logger = logging.getLogger(__name__)

_CLOSED = object()


class Subscription:
    """FIFO queue of messages pushed to one viewer session."""

    def __init__(
        self,
        channel: "DeliveryChannel",
        recipient_id: str,
        *,
        maxsize: int,
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        self.recipient_id = recipient_id
        self._channel = channel
        self._loop = loop
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def pending(self) -> int:
        """Return how many messages are waiting to be read."""

        return self._queue.qsize()

    def deliver(self, message: dict[str, Any]) -> None:
        """Queue ``message``; safe to call from any thread."""

        if self._closed:
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            self._offer(message)
            return
        try:
            self._loop.call_soon_threadsafe(self._offer, message)
        except RuntimeError:
            # The owning loop already shut down; nobody is listening anymore.
            self._closed = True

    def _offer(self, message: Any) -> None:
        if self._closed:
            return
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning(
                "Dropping realtime message for %s: subscription queue is full",
                self.recipient_id,
            )

    async def get(self) -> dict[str, Any] | None:
        """Wait for the next message. Returns ``None`` once the subscription closes."""

        if self._closed and self._queue.empty():
            return None
        message = await self._queue.get()
        if message is _CLOSED:
            return None
        return message

    def get_nowait(self) -> dict[str, Any] | None:
        try:
            message = self._queue.get_nowait()
        except asyncio.QueueEmpty:
            return None
        return None if message is _CLOSED else message

    def close(self) -> None:
        """Detach from the channel and wake up any pending reader. Idempotent."""

        if self._closed:
            return
        self._closed = True
        self._channel._release(self)
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> dict[str, Any]:
        message = await self.get()
        if message is None:
            raise StopAsyncIteration
        return message


class DeliveryChannel:
    """Route published messages to the open subscriptions of each recipient."""

    def __init__(self, *, queue_size: int = 100) -> None:
        self._queue_size = queue_size
        self._subscriptions: DefaultDict[str, Set[Subscription]] = defaultdict(set)
        self._lock = threading.Lock()

    def open(self, recipient_id: str) -> Subscription:
        """Register a new subscription for ``recipient_id`` on the running loop.

        Prefer :meth:`subscribe`, which guarantees the subscription is closed.
        """

        subscription = Subscription(
            self,
            recipient_id,
            maxsize=self._queue_size,
            loop=asyncio.get_running_loop(),
        )
        with self._lock:
            self._subscriptions[recipient_id].add(subscription)
        logger.debug("Opened realtime subscription for %s", recipient_id)
        return subscription

    @asynccontextmanager
    async def subscribe(self, recipient_id: str) -> AsyncIterator[Subscription]:
        """Hold a subscription for ``recipient_id`` for the duration of the block."""

        subscription = self.open(recipient_id)
        try:
            yield subscription
        finally:
            subscription.close()

    def _release(self, subscription: Subscription) -> None:
        with self._lock:
            subscriptions = self._subscriptions.get(subscription.recipient_id)
            if subscriptions is None:
                return
            subscriptions.discard(subscription)
            if not subscriptions:
                self._subscriptions.pop(subscription.recipient_id, None)
        logger.debug("Closed realtime subscription for %s", subscription.recipient_id)

    def publish(self, recipient_id: str, message: dict[str, Any]) -> int:
        """Push ``message`` to every open subscription of ``recipient_id``.

        Returns the number of subscriptions the message was handed to. Zero
        means the viewer is offline and the message was dropped.
        """

        with self._lock:
            subscriptions = list(self._subscriptions.get(recipient_id, ()))
        for subscription in subscriptions:
            subscription.deliver(copy.deepcopy(message))
        return len(subscriptions)

    def subscriber_count(self, recipient_id: str) -> int:
        with self._lock:
            return len(self._subscriptions.get(recipient_id, ()))


__all__ = ["DeliveryChannel", "Subscription"]
