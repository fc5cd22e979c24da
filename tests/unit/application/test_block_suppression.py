"""Unit tests for BlockSuppression – emergency-contact suppression window."""

from __future__ import annotations

import asyncio
from datetime import timedelta
from typing import Any

import pytest

from blocked_numbers.application.blocklist import (
    SUPPRESSION_TOPIC,
    BlockedNumberStore,
    BlockSuppression,
    MatchEngine,
)
from blocked_numbers.application.notifications import ChangeEvent, ChangeNotifier
from blocked_numbers.kernel.phone import Normalizer
from blocked_numbers.testing.fakes import (
    FakeClock,
    FakeCountryDetector,
    FrozenClock,
    InMemoryBlockedNumberTable,
)


def _run(coro: Any) -> Any:
    return asyncio.run(coro)


def _matcher() -> tuple[BlockedNumberStore, MatchEngine]:
    table = InMemoryBlockedNumberTable()
    normalizer = Normalizer(FakeCountryDetector("US"))
    return BlockedNumberStore(table, normalizer), MatchEngine(table, normalizer)


def _suppression(clock: FrozenClock, notifier: ChangeNotifier | None = None) -> BlockSuppression:
    return BlockSuppression(_matcher()[1], timedelta(minutes=60), clock=clock, notifier=notifier)


class TestStatus:
    def test_not_suppressed_initially(self) -> None:
        status = _suppression(FakeClock()).get_block_suppression_status()
        assert status.is_suppressed is False
        assert status.until is None

    def test_emergency_contact_starts_window(self) -> None:
        clock = FakeClock()
        suppression = _suppression(clock)
        status = suppression.notify_emergency_contact()
        assert status.is_suppressed
        assert status.until == clock.now() + timedelta(minutes=60)

    def test_window_expires(self) -> None:
        clock = FakeClock()
        suppression = _suppression(clock)
        suppression.notify_emergency_contact()
        clock.advance(minutes=59)
        assert suppression.get_block_suppression_status().is_suppressed
        clock.advance(minutes=1)
        assert not suppression.get_block_suppression_status().is_suppressed

    def test_end_early(self) -> None:
        suppression = _suppression(FakeClock())
        suppression.notify_emergency_contact()
        suppression.end_block_suppression()
        assert not suppression.get_block_suppression_status().is_suppressed

    def test_duration_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            BlockSuppression(_matcher()[1], timedelta(0))


class TestShouldSystemBlockNumber:
    def test_honours_window(self) -> None:
        async def main() -> list[bool]:
            store, matcher = _matcher()
            await store.insert({"original_number": "+1-500-454-1111"})
            clock = FakeClock()
            suppression = BlockSuppression(matcher, timedelta(minutes=5), clock=clock)
            results = [await suppression.should_system_block_number("500-454 1111")]
            suppression.notify_emergency_contact()
            results.append(await suppression.should_system_block_number("500-454 1111"))
            results.append(await matcher.is_blocked("500-454 1111"))
            clock.advance(minutes=5)
            results.append(await suppression.should_system_block_number("500-454 1111"))
            return results

        assert _run(main()) == [True, False, True, True]

    def test_unknown_number(self) -> None:
        assert _run(_suppression(FakeClock()).should_system_block_number("1234")) is False


class TestNotifications:
    def test_changes_are_announced(self) -> None:
        async def main() -> list[str]:
            events: list[ChangeEvent] = []
            notifier = ChangeNotifier(topic=SUPPRESSION_TOPIC)
            await notifier.subscribe(events.append)
            suppression = _suppression(FakeClock(), notifier)
            suppression.notify_emergency_contact()
            suppression.end_block_suppression()
            # nothing active any more
            suppression.end_block_suppression()
            await notifier.drain()
            await notifier.close()
            return [event.topic for event in events]

        assert _run(main()) == [SUPPRESSION_TOPIC, SUPPRESSION_TOPIC]
