"""Application notifications – ChangeNotifier.

A process-wide broadcast telling observers that the record set changed.
Publishing never waits on observers: each subscriber owns an
:class:`asyncio.Queue` drained by its own background task, so a slow or
failing observer cannot stall writers or other observers.
"""
from __future__ import annotations

import asyncio
import dataclasses
import inspect
from datetime import UTC, datetime
from typing import Any, Awaitable, Callable

from blocked_numbers.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TOPIC = "blocked_numbers"


@dataclasses.dataclass(frozen=True)
class ChangeEvent:
    """Says only that something under *topic* changed."""

    topic: str
    occurred_at: datetime = dataclasses.field(default_factory=lambda: datetime.now(UTC))


#: Observer callable; may be a plain function or a coroutine function.
Observer = Callable[[ChangeEvent], Awaitable[None] | None]


class Subscription:
    """Handle for one registered observer and its delivery queue."""

    def __init__(self, observer: Observer, maxsize: int = 0) -> None:
        self.observer = observer
        self.queue: asyncio.Queue[ChangeEvent | None] = asyncio.Queue(maxsize=maxsize)
        self.task: asyncio.Task[None] | None = None

    @property
    def active(self) -> bool:
        return self.task is not None and not self.task.done()

    def offer(self, event: ChangeEvent) -> bool:
        """Queue *event* without blocking; ``False`` when the queue is full."""
        try:
            self.queue.put_nowait(event)
        except asyncio.QueueFull:
            return False
        return True


class ChangeNotifier:
    """Fan-out of payload-free change events to registered observers.

    Usage::

        notifier = ChangeNotifier()
        await notifier.subscribe(on_change)
        notifier.notify_changed()   # returns immediately
        await notifier.drain()      # optional: wait for delivery

    Parameters
    ----------
    topic:
        Label carried by every :class:`ChangeEvent`.
    maxsize:
        Per-observer queue bound; ``0`` means unbounded. When a bounded
        queue is full the event is coalesced into the ones already pending,
        which carry the same "changed" signal.
    """

    def __init__(self, topic: str = DEFAULT_TOPIC, maxsize: int = 0) -> None:
        self._topic = topic
        self._maxsize = maxsize
        # Replaced wholesale on (un)subscribe; publishers iterate a snapshot.
        self._subscriptions: tuple[Subscription, ...] = ()

    @property
    def topic(self) -> str:
        return self._topic

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def _find(self, observer: Observer) -> Subscription | None:
        for subscription in self._subscriptions:
            if subscription.observer is observer or subscription.observer == observer:
                return subscription
        return None

    async def subscribe(self, observer: Observer) -> Subscription:
        """Register *observer*. Subscribing the same observer twice is a no-op."""
        existing = self._find(observer)
        if existing is not None:
            return existing
        subscription = Subscription(observer, maxsize=self._maxsize)
        subscription.task = asyncio.ensure_future(self._deliver(subscription))
        self._subscriptions = (*self._subscriptions, subscription)
        logger.debug("change_notifier.subscribed", topic=self._topic, subscribers=self.subscriber_count)
        return subscription

    async def unsubscribe(self, observer: Observer | Subscription) -> bool:
        """Stop delivering to *observer*. Already queued events still arrive."""
        subscription = observer if isinstance(observer, Subscription) else self._find(observer)
        if subscription is None or subscription not in self._subscriptions:
            return False
        self._subscriptions = tuple(s for s in self._subscriptions if s is not subscription)
        try:
            subscription.queue.put_nowait(None)
        except asyncio.QueueFull:
            if subscription.task is not None:
                subscription.task.cancel()
        logger.debug("change_notifier.unsubscribed", topic=self._topic, subscribers=self.subscriber_count)
        return True

    def notify_changed(self) -> int:
        """Publish one change event to every current subscriber.

        Never blocks and never raises on behalf of an observer. Returns the
        number of subscribers the event was queued for.
        """
        event = ChangeEvent(topic=self._topic)
        queued = 0
        for subscription in self._subscriptions:
            if subscription.offer(event):
                queued += 1
            else:
                logger.debug("change_notifier.coalesced", topic=self._topic)
        return queued

    async def drain(self) -> None:
        """Wait until every event queued so far has been handled."""
        pending = [s.queue.join() for s in self._subscriptions if s.active]
        if pending:
            await asyncio.gather(*pending)

    async def close(self) -> None:
        """Drop all subscribers and stop their delivery tasks."""
        subscriptions, self._subscriptions = self._subscriptions, ()
        tasks = [s.task for s in subscriptions if s.task is not None]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _deliver(self, subscription: Subscription) -> None:
        """Background task: hand queued events to one observer, in order."""
        while True:
            event = await subscription.queue.get()
            try:
                if event is None:
                    break
                result: Any = subscription.observer(event)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(
                    "change_notifier.observer_failed",
                    topic=self._topic,
                    observer=getattr(subscription.observer, "__qualname__", repr(subscription.observer)),
                )
            finally:
                subscription.queue.task_done()


__all__ = ["ChangeEvent", "ChangeNotifier", "DEFAULT_TOPIC", "Observer", "Subscription"]
