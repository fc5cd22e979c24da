"""SQLAlchemy adapter – SqlAlchemyBlockedNumberTable."""
from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from blocked_numbers.adapters.sqlalchemy.compiler import compile_expr, compile_order
from blocked_numbers.adapters.sqlalchemy.models import (
    UNIQUE_ORIGINAL_NUMBER,
    Base,
    BlockedNumberModel,
)
from blocked_numbers.adapters.sqlalchemy.session import SqlAlchemySessionFactory
from blocked_numbers.adapters.sqlalchemy.transaction import transaction
from blocked_numbers.kernel.blocklist import (
    COLUMN_E164_NUMBER,
    COLUMN_ORIGINAL_NUMBER,
    COLUMN_STRIPPED_NUMBER,
    BlockedNumberRecord,
    BlockedNumberTable,
    Expr,
    NewBlockedNumber,
    SortKey,
)
from blocked_numbers.kernel.errors import ConstraintViolationError, InvalidArgumentError

_PROBE_COLUMNS: dict[str, Any] = {
    COLUMN_ORIGINAL_NUMBER: BlockedNumberModel.original_number,
    COLUMN_E164_NUMBER: BlockedNumberModel.e164_number,
    COLUMN_STRIPPED_NUMBER: BlockedNumberModel.stripped_number,
}


class SqlAlchemyBlockedNumberTable(BlockedNumberTable):
    """Blocked-number table on any SQLAlchemy async driver.

    Each call runs in its own session and transaction. Uniqueness of
    ``original_number`` is enforced by the database; a violation surfaces
    as :class:`ConstraintViolationError` and nothing is written.

    Call :meth:`create_schema` once before use.
    """

    def __init__(self, session_factory: SqlAlchemySessionFactory) -> None:
        self._sessions = session_factory

    @classmethod
    def from_url(cls, database_url: str, **engine_kwargs: Any) -> "SqlAlchemyBlockedNumberTable":
        return cls(SqlAlchemySessionFactory(database_url, **engine_kwargs))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def create_schema(self) -> None:
        async with self._sessions.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        await self._sessions.dispose()

    # ------------------------------------------------------------------
    # BlockedNumberWriter
    # ------------------------------------------------------------------

    async def add(self, new: NewBlockedNumber) -> BlockedNumberRecord:
        try:
            async with transaction(self._sessions) as session:
                model = BlockedNumberModel(
                    original_number=new.original_number,
                    e164_number=new.e164_number,
                    stripped_number=new.stripped_number,
                )
                session.add(model)
                await session.flush()
                record = model.to_record()
        except IntegrityError as exc:
            raise ConstraintViolationError(
                f"UNIQUE constraint failed: {BlockedNumberModel.__tablename__}.{COLUMN_ORIGINAL_NUMBER}",
                constraint=UNIQUE_ORIGINAL_NUMBER,
                cause=exc,
            ) from exc
        return record

    async def remove(self, where: Expr | None = None) -> int:
        stmt = delete(BlockedNumberModel).execution_options(synchronize_session=False)
        if where is not None:
            stmt = stmt.where(compile_expr(where))
        async with transaction(self._sessions) as session:
            result = await session.execute(stmt)
            removed = int(result.rowcount or 0)
        return removed

    # ------------------------------------------------------------------
    # BlockedNumberReader
    # ------------------------------------------------------------------

    async def select(
        self,
        where: Expr | None = None,
        order_by: Sequence[SortKey] = (),
    ) -> list[BlockedNumberRecord]:
        stmt = select(BlockedNumberModel).order_by(*compile_order(order_by))
        if where is not None:
            stmt = stmt.where(compile_expr(where))
        async with self._sessions() as session:
            result = await session.execute(stmt)
            return [model.to_record() for model in result.scalars().all()]

    async def count(self, where: Expr | None = None) -> int:
        stmt = select(func.count()).select_from(BlockedNumberModel)
        if where is not None:
            stmt = stmt.where(compile_expr(where))
        async with self._sessions() as session:
            return int((await session.execute(stmt)).scalar_one())

    async def exists(self, column: str, value: str) -> bool:
        target = _PROBE_COLUMNS.get(column)
        if target is None:
            raise InvalidArgumentError(f"Cannot probe column {column!r}", field=column)
        stmt = select(BlockedNumberModel.id).where(target == value).limit(1)
        async with self._sessions() as session:
            return (await session.execute(stmt)).first() is not None


__all__ = ["SqlAlchemyBlockedNumberTable"]
