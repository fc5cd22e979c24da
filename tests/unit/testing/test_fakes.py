"""Unit tests for the in-memory testing fakes."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from typing import Any

import pytest

from blocked_numbers.kernel.blocklist import NewBlockedNumber, parse_selection, parse_sort_order
from blocked_numbers.kernel.errors import ConstraintViolationError, CountryDetectionError, InvalidArgumentError
from blocked_numbers.testing.fakes import (
    FakeClock,
    FakeCountryDetector,
    FrozenClock,
    InMemoryBlockedNumberTable,
)


def _run(coro: Any) -> Any:
    return asyncio.run(coro)


class TestInMemoryBlockedNumberTable:
    def test_add_and_select(self) -> None:
        async def main() -> list[int]:
            table = InMemoryBlockedNumberTable()
            await table.add(NewBlockedNumber("123", "123"))
            await table.add(NewBlockedNumber("456", "456"))
            return [r.id for r in await table.select()]

        assert _run(main()) == [1, 2]

    def test_unique_original_number(self) -> None:
        async def main() -> int:
            table = InMemoryBlockedNumberTable()
            await table.add(NewBlockedNumber("123", "123"))
            with pytest.raises(ConstraintViolationError):
                await table.add(NewBlockedNumber("123", "123"))
            return len(table.records)

        assert _run(main()) == 1

    def test_ids_are_not_reused(self) -> None:
        async def main() -> int:
            table = InMemoryBlockedNumberTable()
            await table.add(NewBlockedNumber("123", "123"))
            await table.remove()
            return (await table.add(NewBlockedNumber("123", "123"))).id

        assert _run(main()) == 2

    def test_null_sorts_first(self) -> None:
        async def main() -> list[str]:
            table = InMemoryBlockedNumberTable()
            await table.add(NewBlockedNumber("a", "", "+2"))
            await table.add(NewBlockedNumber("b", ""))
            await table.add(NewBlockedNumber("c", "", "+1"))
            records = await table.select(order_by=parse_sort_order("e164_number"))
            return [r.original_number for r in records]

        assert _run(main()) == ["b", "c", "a"]

    def test_remove_with_filter(self) -> None:
        async def main() -> tuple[int, int]:
            table = InMemoryBlockedNumberTable()
            await table.add(NewBlockedNumber("123", "123", "12345"))
            await table.add(NewBlockedNumber("456", "456"))
            removed = await table.remove(parse_selection("e164_number = ?", ["12345"]))
            return removed, await table.count()

        assert _run(main()) == (1, 1)

    def test_exists_rejects_other_columns(self) -> None:
        with pytest.raises(InvalidArgumentError):
            _run(InMemoryBlockedNumberTable().exists("id", "1"))


class TestFakeCountryDetector:
    def test_counts_calls(self) -> None:
        detector = FakeCountryDetector("GB")
        detector.current_country_iso()
        assert detector.calls == 1

    def test_fail_and_recover(self) -> None:
        detector = FakeCountryDetector()
        detector.fail()
        with pytest.raises(CountryDetectionError):
            detector.current_country_iso()
        detector.fail(False)
        assert detector.current_country_iso() == "US"


class TestFakeClock:
    def test_pinned(self) -> None:
        clock = FakeClock()
        assert isinstance(clock, FrozenClock)
        assert clock.now() == datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def test_custom_start(self) -> None:
        start = datetime(2030, 6, 1, tzinfo=UTC)
        clock = FakeClock(start)
        clock.advance(minutes=5)
        assert clock.now() == datetime(2030, 6, 1, 0, 5, tzinfo=UTC)
