"""Application blocklist – BlockedNumberStore.

The record store validates writes, derives the comparison keys, persists
through a :class:`BlockedNumberTable` backend and announces every effective
mutation on a :class:`ChangeNotifier`.

Writes are serialized by one lock so that validate → derive → persist runs
as a unit; the backend's ``UNIQUE(original_number)`` constraint guards the
same rule across processes. Reads do not take the lock.
"""

from __future__ import annotations

import asyncio
from typing import Any, Mapping, Sequence

from blocked_numbers.application.notifications import ChangeNotifier
from blocked_numbers.kernel.blocklist import (
    COLUMN_E164_NUMBER,
    COLUMN_ORIGINAL_NUMBER,
    SYSTEM_COLUMNS,
    WRITABLE_COLUMNS,
    BlockedNumberRecord,
    BlockedNumberTable,
    Expr,
    NewBlockedNumber,
    all_of,
    column_equals,
    fits_integer,
    id_equals,
    parse_selection,
    parse_sort_order,
)
from blocked_numbers.kernel.blocklist.selection import Or
from blocked_numbers.kernel.errors import ConstraintViolationError, InvalidArgumentError
from blocked_numbers.kernel.phone import Normalizer, canonical_e164
from blocked_numbers.observability.logging import get_logger

logger = get_logger(__name__)


def _identity(record_id: int | None) -> Expr | None:
    if record_id is None:
        return None
    if not fits_integer(record_id):
        raise InvalidArgumentError(f"Record id out of range: {record_id}", field="record_id")
    return id_equals(record_id)


class BlockedNumberStore:
    """Create/delete/query access to the blocklist. Records are never updated."""

    def __init__(
        self,
        table: BlockedNumberTable,
        normalizer: Normalizer,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        self._table = table
        self._normalizer = normalizer
        self._notifier = notifier
        self._write_lock = asyncio.Lock()

    @property
    def table(self) -> BlockedNumberTable:
        return self._table

    @property
    def normalizer(self) -> Normalizer:
        return self._normalizer

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _validate(self, values: Mapping[str, Any]) -> tuple[str, str | None]:
        for column in values:
            if column in SYSTEM_COLUMNS:
                raise InvalidArgumentError(f"{column} must not be specified", field=column)
            if column not in WRITABLE_COLUMNS:
                raise InvalidArgumentError(f"Unknown column {column!r}", field=column)

        original = values.get(COLUMN_ORIGINAL_NUMBER)
        if original is None or (isinstance(original, str) and original == ""):
            raise InvalidArgumentError(
                f"Missing a required column {COLUMN_ORIGINAL_NUMBER}",
                field=COLUMN_ORIGINAL_NUMBER,
            )
        if not isinstance(original, str):
            raise InvalidArgumentError(
                f"{COLUMN_ORIGINAL_NUMBER} must be a string", field=COLUMN_ORIGINAL_NUMBER
            )

        e164 = values.get(COLUMN_E164_NUMBER)
        if e164 is not None and not isinstance(e164, str):
            raise InvalidArgumentError(f"{COLUMN_E164_NUMBER} must be a string", field=COLUMN_E164_NUMBER)
        return original, (e164 or None)

    def _derive(self, original: str, e164_override: str | None) -> NewBlockedNumber:
        keys = self._normalizer.normalize(original)
        e164 = canonical_e164(e164_override) if e164_override else keys.e164
        return NewBlockedNumber(
            original_number=original,
            stripped_number=keys.stripped,
            e164_number=e164,
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def insert(self, values: Mapping[str, Any]) -> BlockedNumberRecord:
        """Validate *values*, derive keys and persist a new record.

        Raises :class:`InvalidArgumentError` for malformed input and
        :class:`ConstraintViolationError` when the number is already blocked.
        """
        original, e164_override = self._validate(values)
        async with self._write_lock:
            new = self._derive(original, e164_override)
            try:
                record = await self._table.add(new)
            except ConstraintViolationError:
                logger.warning("blocked_number.duplicate", original_number=original)
                raise
        logger.info("blocked_number.inserted", id=record.id, original_number=record.original_number)
        self._notify()
        return record

    async def block(self, original_number: str, e164_number: str | None = None) -> BlockedNumberRecord:
        values: dict[str, Any] = {COLUMN_ORIGINAL_NUMBER: original_number}
        if e164_number is not None:
            values[COLUMN_E164_NUMBER] = e164_number
        return await self.insert(values)

    async def delete(
        self,
        record_id: int | None = None,
        selection: str | None = None,
        selection_args: Sequence[Any] = (),
    ) -> int:
        """Delete one record by id, the rows matching *selection*, or all rows.

        Deleting by id is unconditional: combining an id with a selection is
        rejected.
        """
        if record_id is not None and selection:
            raise InvalidArgumentError(
                "selection must be null when deleting a single record", field="selection"
            )
        where = _identity(record_id) if record_id is not None else parse_selection(selection, selection_args)
        return await self._remove(where)

    async def unblock(self, number: str) -> int:
        """Delete every record blocking *number* verbatim or by its E.164 form."""
        if not number:
            return 0
        where: Expr = column_equals(COLUMN_ORIGINAL_NUMBER, number)
        e164 = self._normalizer.e164(number)
        if e164 is not None:
            where = Or((where, column_equals(COLUMN_E164_NUMBER, e164)))
        return await self._remove(where)

    async def _remove(self, where: Expr | None) -> int:
        async with self._write_lock:
            count = await self._table.remove(where)
        if count:
            logger.info("blocked_numbers.deleted", count=count)
            self._notify()
        return count

    def _notify(self) -> None:
        if self._notifier is not None:
            self._notifier.notify_changed()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def query(
        self,
        record_id: int | None = None,
        selection: str | None = None,
        selection_args: Sequence[Any] = (),
        sort_order: str | None = None,
    ) -> list[BlockedNumberRecord]:
        """Return the matching records as of the time of the call."""
        where = all_of(
            _identity(record_id),
            parse_selection(selection, selection_args),
        )
        return await self._table.select(where, parse_sort_order(sort_order))

    async def get(self, record_id: int) -> BlockedNumberRecord | None:
        if not fits_integer(record_id):
            return None
        records = await self._table.select(id_equals(record_id))
        return records[0] if records else None

    async def count(self) -> int:
        return await self._table.count()


__all__ = ["BlockedNumberStore"]
