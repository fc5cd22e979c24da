"""Backend ports for the blocked-number table.

The table is split by capability. :class:`BlockedNumberReader` answers
queries; :class:`BlockedNumberWriter` can only create and delete rows, so an
in-place update is not expressible through the port at all. Concrete
backends live in ``adapters/sqlalchemy`` and ``testing/fakes``.
"""

from __future__ import annotations

import abc
from typing import Sequence

from blocked_numbers.kernel.blocklist.record import BlockedNumberRecord, NewBlockedNumber
from blocked_numbers.kernel.blocklist.selection import Expr, SortKey


class BlockedNumberReader(abc.ABC):
    """Port: read-only access to the blocked-number table.

    Every call observes one consistent snapshot of the table.
    """

    @abc.abstractmethod
    async def select(
        self,
        where: Expr | None = None,
        order_by: Sequence[SortKey] = (),
    ) -> list[BlockedNumberRecord]: ...

    @abc.abstractmethod
    async def count(self, where: Expr | None = None) -> int: ...

    @abc.abstractmethod
    async def exists(self, column: str, value: str) -> bool:
        """Return ``True`` if some row has exactly *value* in *column*."""


class BlockedNumberWriter(abc.ABC):
    """Port: create and delete rows. There is deliberately no update."""

    @abc.abstractmethod
    async def add(self, new: NewBlockedNumber) -> BlockedNumberRecord:
        """Persist *new* in one transaction and return it with its id.

        Raises :class:`ConstraintViolationError` when ``original_number``
        is already present.
        """

    @abc.abstractmethod
    async def remove(self, where: Expr | None = None) -> int:
        """Delete the rows matching *where* (all rows for ``None``)."""


class BlockedNumberTable(BlockedNumberReader, BlockedNumberWriter):
    """Port: full backend with a lifecycle."""

    async def create_schema(self) -> None:
        """Create backing storage if needed. No-op by default."""

    async def close(self) -> None:
        """Release backend resources. No-op by default."""


__all__ = ["BlockedNumberReader", "BlockedNumberTable", "BlockedNumberWriter"]
