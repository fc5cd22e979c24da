"""Unit tests for ChangeNotifier – fan-out of change events."""

from __future__ import annotations

import asyncio
from typing import Any

from blocked_numbers.application.notifications import (
    DEFAULT_TOPIC,
    ChangeEvent,
    ChangeNotifier,
    Subscription,
)


def _run(coro: Any) -> Any:
    return asyncio.run(coro)


class TestSubscribe:
    def test_delivers_to_every_subscriber(self) -> None:
        async def main() -> tuple[int, int]:
            first: list[ChangeEvent] = []
            second: list[ChangeEvent] = []
            notifier = ChangeNotifier()
            await notifier.subscribe(first.append)
            await notifier.subscribe(second.append)
            assert notifier.notify_changed() == 2
            await notifier.drain()
            await notifier.close()
            return len(first), len(second)

        assert _run(main()) == (1, 1)

    def test_event_carries_topic(self) -> None:
        async def main() -> ChangeEvent:
            events: list[ChangeEvent] = []
            notifier = ChangeNotifier()
            await notifier.subscribe(events.append)
            notifier.notify_changed()
            await notifier.drain()
            await notifier.close()
            return events[0]

        event = _run(main())
        assert event.topic == DEFAULT_TOPIC
        assert event.occurred_at.tzinfo is not None

    def test_subscribe_twice_is_noop(self) -> None:
        async def main() -> tuple[int, int]:
            events: list[ChangeEvent] = []
            notifier = ChangeNotifier()
            first = await notifier.subscribe(events.append)
            second = await notifier.subscribe(events.append)
            assert first is second
            notifier.notify_changed()
            await notifier.drain()
            await notifier.close()
            return notifier.subscriber_count, len(events)

        assert _run(main()) == (0, 1)

    def test_coroutine_observer(self) -> None:
        async def main() -> int:
            seen: list[str] = []

            async def observer(event: ChangeEvent) -> None:
                await asyncio.sleep(0)
                seen.append(event.topic)

            notifier = ChangeNotifier(topic="custom")
            await notifier.subscribe(observer)
            notifier.notify_changed()
            notifier.notify_changed()
            await notifier.drain()
            await notifier.close()
            return len(seen)

        assert _run(main()) == 2

    def test_no_subscribers(self) -> None:
        assert ChangeNotifier().notify_changed() == 0


class TestUnsubscribe:
    def test_stops_delivery(self) -> None:
        async def main() -> int:
            events: list[ChangeEvent] = []
            notifier = ChangeNotifier()
            await notifier.subscribe(events.append)
            notifier.notify_changed()
            await notifier.drain()
            assert await notifier.unsubscribe(events.append) is True
            notifier.notify_changed()
            await asyncio.sleep(0)
            await notifier.close()
            return len(events)

        assert _run(main()) == 1

    def test_by_subscription_handle(self) -> None:
        async def main() -> bool:
            notifier = ChangeNotifier()
            subscription = await notifier.subscribe(lambda event: None)
            assert isinstance(subscription, Subscription)
            removed = await notifier.unsubscribe(subscription)
            assert notifier.subscriber_count == 0
            await notifier.close()
            return removed

        assert _run(main()) is True

    def test_unknown_observer(self) -> None:
        async def main() -> bool:
            notifier = ChangeNotifier()
            return await notifier.unsubscribe(lambda event: None)

        assert _run(main()) is False


class TestIsolation:
    def test_failing_observer_does_not_affect_others(self) -> None:
        async def main() -> int:
            events: list[ChangeEvent] = []

            def broken(event: ChangeEvent) -> None:
                raise RuntimeError("observer bug")

            notifier = ChangeNotifier()
            await notifier.subscribe(broken)
            await notifier.subscribe(events.append)
            notifier.notify_changed()
            notifier.notify_changed()
            await notifier.drain()
            await notifier.close()
            return len(events)

        assert _run(main()) == 2

    def test_failing_observer_keeps_receiving(self) -> None:
        async def main() -> int:
            calls: list[int] = []

            def flaky(event: ChangeEvent) -> None:
                calls.append(1)
                raise ValueError("nope")

            notifier = ChangeNotifier()
            await notifier.subscribe(flaky)
            notifier.notify_changed()
            notifier.notify_changed()
            await notifier.drain()
            await notifier.close()
            return len(calls)

        assert _run(main()) == 2

    def test_notify_does_not_wait_for_slow_observer(self) -> None:
        async def main() -> tuple[int, int]:
            release = asyncio.Event()
            seen: list[ChangeEvent] = []

            async def slow(event: ChangeEvent) -> None:
                await release.wait()
                seen.append(event)

            notifier = ChangeNotifier()
            await notifier.subscribe(slow)
            notifier.notify_changed()
            await asyncio.sleep(0)
            before = len(seen)
            release.set()
            await notifier.drain()
            await notifier.close()
            return before, len(seen)

        assert _run(main()) == (0, 1)


class TestBoundedQueue:
    def test_full_queue_coalesces(self) -> None:
        async def main() -> tuple[list[int], int]:
            seen: list[ChangeEvent] = []
            notifier = ChangeNotifier(maxsize=1)
            await notifier.subscribe(seen.append)
            # Nothing is delivered until the event loop gets a turn.
            queued = [notifier.notify_changed() for _ in range(3)]
            await notifier.drain()
            await notifier.close()
            return queued, len(seen)

        queued, delivered = _run(main())
        assert queued == [1, 0, 0]
        assert delivered == 1
