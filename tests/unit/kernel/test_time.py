"""Unit tests for kernel time utilities."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from blocked_numbers.kernel.time import Clock, FrozenClock, SystemClock


class TestSystemClock:
    def test_now_returns_utc_aware_datetime(self) -> None:
        result = SystemClock().now()
        assert isinstance(result, datetime)
        assert result.utcoffset() == timedelta(0)

    def test_satisfies_protocol(self) -> None:
        clock: Clock = SystemClock()
        assert clock.now() <= SystemClock().now()


class TestFrozenClock:
    def test_now_is_fixed(self) -> None:
        fixed = datetime(2026, 1, 1, tzinfo=UTC)
        clock = FrozenClock(fixed)
        assert clock.now() == fixed
        assert clock.now() == fixed

    def test_advance(self) -> None:
        clock = FrozenClock(datetime(2026, 1, 1, tzinfo=UTC))
        clock.advance(minutes=90)
        assert clock.now() == datetime(2026, 1, 1, 1, 30, tzinfo=UTC)
