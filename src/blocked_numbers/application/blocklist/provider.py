"""Application blocklist – BlockedNumberProvider.

The operation surface offered to other components, addressed by resource
reference (see :mod:`blocked_numbers.kernel.blocklist.resource`). Every
record operation first asks the injected :class:`Authorizer`.
"""

from __future__ import annotations

from typing import Any, Mapping, NoReturn, Sequence

from blocked_numbers.application.blocklist.matcher import MatchEngine
from blocked_numbers.application.blocklist.store import BlockedNumberStore
from blocked_numbers.kernel.blocklist import (
    BlockedNumberRecord,
    RecordType,
    ResourceRef,
    item_ref,
    parse_ref,
)
from blocked_numbers.kernel.errors import (
    ForbiddenError,
    InvalidArgumentError,
    UnsupportedOperationError,
)
from blocked_numbers.kernel.security import AllowAllAuthorizer, Authorizer
from blocked_numbers.observability.logging import get_logger

logger = get_logger(__name__)


class BlockedNumberProvider:
    """Resource-addressed access to the blocklist."""

    def __init__(
        self,
        store: BlockedNumberStore,
        matcher: MatchEngine,
        authorizer: Authorizer | None = None,
    ) -> None:
        self._store = store
        self._matcher = matcher
        self._authorizer = authorizer or AllowAllAuthorizer()

    def _enforce(self, operation: str) -> None:
        if not self._authorizer.can_block_numbers():
            logger.warning("blocked_numbers.access_denied", operation=operation)
            raise ForbiddenError(
                "Caller is not allowed to access blocked numbers", operation=operation
            )

    @staticmethod
    def _resolve(ref: str) -> ResourceRef:
        parsed = parse_ref(ref)
        if parsed is None:
            raise InvalidArgumentError(f"Unsupported resource reference: {ref!r}", field="ref")
        return parsed

    def get_type(self, ref: str) -> RecordType | None:
        parsed = parse_ref(ref)
        return None if parsed is None else parsed.record_type

    async def insert(self, ref: str, values: Mapping[str, Any]) -> str:
        """Insert a record into the collection and return its item reference."""
        self._enforce("insert")
        if self._resolve(ref).record_type is not RecordType.COLLECTION:
            raise InvalidArgumentError(f"Unsupported resource reference: {ref!r}", field="ref")
        record = await self._store.insert(values)
        return item_ref(record.id)

    async def delete(
        self,
        ref: str,
        selection: str | None = None,
        selection_args: Sequence[Any] = (),
    ) -> int:
        self._enforce("delete")
        parsed = self._resolve(ref)
        return await self._store.delete(parsed.record_id, selection, selection_args)

    async def query(
        self,
        ref: str,
        selection: str | None = None,
        selection_args: Sequence[Any] = (),
        sort_order: str | None = None,
    ) -> list[BlockedNumberRecord]:
        self._enforce("query")
        parsed = self._resolve(ref)
        return await self._store.query(parsed.record_id, selection, selection_args, sort_order)

    async def update(self, *args: Any, **kwargs: Any) -> NoReturn:  # noqa: ARG002
        """Records are immutable; this always fails."""
        raise UnsupportedOperationError("Update is not supported", operation="update")

    async def is_blocked(self, number: str | None) -> bool:
        self._enforce("is_blocked")
        return await self._matcher.is_blocked(number)

    async def unblock(self, number: str) -> int:
        self._enforce("unblock")
        return await self._store.unblock(number)

    def can_current_user_block_numbers(self) -> bool:
        return self._authorizer.can_block_numbers()


__all__ = ["BlockedNumberProvider"]
