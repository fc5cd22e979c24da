"""Unit tests for BlockedNumberStore (in-memory table)."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from blocked_numbers.application.blocklist import BlockedNumberStore
from blocked_numbers.application.notifications import ChangeEvent, ChangeNotifier
from blocked_numbers.kernel.errors import (
    ConstraintViolationError,
    InvalidArgumentError,
    SelectionSyntaxError,
)
from blocked_numbers.kernel.phone import Normalizer
from blocked_numbers.testing.fakes import FakeCountryDetector, InMemoryBlockedNumberTable


def _run(coro: Any) -> Any:
    return asyncio.run(coro)


def _store(country_iso: str | None = "US") -> BlockedNumberStore:
    return BlockedNumberStore(InMemoryBlockedNumberTable(), Normalizer(FakeCountryDetector(country_iso)))


# ---------------------------------------------------------------------------
# Insert
# ---------------------------------------------------------------------------


class TestInsert:
    def test_derives_keys(self) -> None:
        record = _run(_store().insert({"original_number": "+1-500-454-1111"}))
        assert record.id == 1
        assert record.original_number == "+1-500-454-1111"
        assert record.stripped_number == "15004541111"
        assert record.e164_number == "+15004541111"

    def test_national_number_uses_current_country(self) -> None:
        record = _run(_store("US").insert({"original_number": "1-500-454-2222"}))
        assert record.e164_number == "+15004542222"

    def test_unparseable_number_has_no_e164(self) -> None:
        record = _run(_store().insert({"original_number": "abc.def@gmail.com"}))
        assert record.e164_number is None
        assert record.stripped_number == ""

    def test_e164_override_is_canonicalized(self) -> None:
        record = _run(
            _store().insert({"original_number": "045-111-2222", "e164_number": "+81-45-111-2222"})
        )
        assert record.e164_number == "+81451112222"
        assert record.stripped_number == "0451112222"

    def test_e164_override_is_not_validated(self) -> None:
        record = _run(_store().insert({"original_number": "045-381-1111", "e164_number": "12345"}))
        assert record.e164_number == "12345"

    def test_empty_override_is_derived(self) -> None:
        record = _run(_store().insert({"original_number": "+1-500-454-1111", "e164_number": ""}))
        assert record.e164_number == "+15004541111"

    @pytest.mark.parametrize(
        "values",
        [
            {},
            {"original_number": None},
            {"original_number": ""},
            {"id": 1},
            {"stripped_number": "1"},
            {"e164_number": "1"},
            {"original_number": "123", "id": 5},
            {"original_number": "123", "stripped_number": "123"},
            {"original_number": "123", "nickname": "spam"},
            {"original_number": 123},
            {"original_number": "123", "e164_number": 1},
        ],
    )
    def test_rejects_malformed(self, values: dict[str, Any]) -> None:
        store = _store()
        with pytest.raises(InvalidArgumentError):
            _run(store.insert(values))
        assert _run(store.count()) == 0

    def test_missing_original_message(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Missing a required column original_number"):
            _run(_store().insert({"e164_number": "1"}))

    def test_system_column_message(self) -> None:
        with pytest.raises(InvalidArgumentError, match="id must not be specified"):
            _run(_store().insert({"id": 1}))

    def test_duplicate_rejected(self) -> None:
        async def main() -> int:
            store = _store()
            await store.insert({"original_number": "1-408-454-2222"})
            with pytest.raises(ConstraintViolationError):
                await store.insert({"original_number": "1-408-454-2222"})
            await store.insert({"original_number": "1-408-4542222"})
            return await store.count()

        assert _run(main()) == 2

    def test_insert_sequence(self) -> None:
        async def main() -> int:
            store = _store()
            for number in ("123", "+1-2-3", "+1-408-454-1111", "1-408-454-2222", "1-408-4542222"):
                await store.insert({"original_number": number})
            await store.insert({"original_number": "045-381-1111", "e164_number": "+81453811111"})
            return await store.count()

        assert _run(main()) == 6

    def test_concurrent_duplicates_only_one_wins(self) -> None:
        async def main() -> list[Any]:
            store = _store()
            return await asyncio.gather(
                *(store.insert({"original_number": "123"}) for _ in range(5)),
                return_exceptions=True,
            )

        results = _run(main())
        assert sum(1 for r in results if isinstance(r, ConstraintViolationError)) == 4

    def test_block_helper(self) -> None:
        record = _run(_store().block("045-111-2222", e164_number="+81 45 111 2222"))
        assert record.e164_number == "+81451112222"


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------


class TestDelete:
    async def _seed(self, store: BlockedNumberStore) -> list[int]:
        ids = []
        for number in ("123", "+1-2-3", "+1-408-454-1111", "1-408-454-2222"):
            ids.append((await store.insert({"original_number": number})).id)
        ids.append((await store.insert({"original_number": "045-381-1111", "e164_number": "12345"})).id)
        return ids

    def test_delete_flow(self) -> None:
        async def main() -> None:
            store = _store()
            ids = await self._seed(store)
            assert await store.count() == 5

            assert await store.delete(ids[0]) == 1
            assert await store.count() == 4

            with pytest.raises(InvalidArgumentError, match="selection must be null"):
                await store.delete(ids[1], "1=1")
            assert await store.count() == 4

            assert await store.delete(ids[1]) == 1
            assert await store.count() == 3

            assert await store.delete(selection="e164_number=?", selection_args=["12345"]) == 1
            assert await store.count() == 2

            with pytest.raises(SelectionSyntaxError):
                await store.delete(selection="; DROP TABLE blocked; ")
            assert await store.count() == 2

            assert await store.delete() == 2
            assert await store.count() == 0

        _run(main())

    def test_delete_missing_id(self) -> None:
        assert _run(_store().delete(99)) == 0

    def test_unblock_by_original_and_e164(self) -> None:
        async def main() -> tuple[int, int]:
            store = _store()
            await store.insert({"original_number": "+1-500-454-1111"})
            await store.insert({"original_number": "123"})
            removed = await store.unblock("500-454 1111")
            return removed, await store.count()

        assert _run(main()) == (1, 1)

    def test_unblock_verbatim(self) -> None:
        async def main() -> int:
            store = _store()
            await store.insert({"original_number": "abc.def@gmail.com"})
            return await store.unblock("abc.def@gmail.com")

        assert _run(main()) == 1

    def test_unblock_empty(self) -> None:
        assert _run(_store().unblock("")) == 0


# ---------------------------------------------------------------------------
# Query
# ---------------------------------------------------------------------------


class TestQuery:
    def test_query_all_in_id_order(self) -> None:
        async def main() -> list[str]:
            store = _store()
            for number in ("3", "1", "2"):
                await store.insert({"original_number": number})
            return [r.original_number for r in await store.query()]

        assert _run(main()) == ["3", "1", "2"]

    def test_query_sorted(self) -> None:
        async def main() -> list[str]:
            store = _store()
            for number in ("3", "1", "2"):
                await store.insert({"original_number": number})
            return [r.original_number for r in await store.query(sort_order="original_number DESC")]

        assert _run(main()) == ["3", "2", "1"]

    def test_query_by_id_and_selection(self) -> None:
        async def main() -> tuple[int, int]:
            store = _store()
            record = await store.insert({"original_number": "123"})
            hit = await store.query(record.id, "stripped_number = ?", ["123"])
            miss = await store.query(record.id, "stripped_number = ?", ["999"])
            return len(hit), len(miss)

        assert _run(main()) == (1, 0)

    def test_get(self) -> None:
        async def main() -> tuple[Any, Any]:
            store = _store()
            record = await store.insert({"original_number": "123"})
            return await store.get(record.id), await store.get(record.id + 1)

        found, missing = _run(main())
        assert found.original_number == "123"
        assert missing is None

    def test_query_rejects_bad_selection(self) -> None:
        with pytest.raises(SelectionSyntaxError):
            _run(_store().query(selection="id = 1 UNION SELECT 1"))


# ---------------------------------------------------------------------------
# Change notification
# ---------------------------------------------------------------------------


class TestNotifications:
    def test_one_event_per_effective_mutation(self) -> None:
        async def main() -> int:
            events: list[ChangeEvent] = []
            notifier = ChangeNotifier()
            await notifier.subscribe(events.append)
            store = BlockedNumberStore(
                InMemoryBlockedNumberTable(), Normalizer(FakeCountryDetector()), notifier
            )
            record = await store.insert({"original_number": "123"})
            await store.insert({"original_number": "456"})
            with pytest.raises(ConstraintViolationError):
                await store.insert({"original_number": "123"})
            with pytest.raises(InvalidArgumentError):
                await store.insert({})
            await store.delete(record.id + 100)
            await store.delete(record.id)
            await store.query()
            await notifier.drain()
            await notifier.close()
            return len(events)

        # two inserts and one effective delete
        assert _run(main()) == 3
