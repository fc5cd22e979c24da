"""SQLAlchemy adapter – transactional session scope."""
from __future__ import annotations

import contextlib
from typing import AsyncIterator, Callable

from sqlalchemy.ext.asyncio import AsyncSession


@contextlib.asynccontextmanager
async def transaction(session_factory: Callable[[], AsyncSession]) -> AsyncIterator[AsyncSession]:
    """Yield a session whose work is committed as one unit.

    The transaction commits when the block exits normally and rolls back
    when it raises; the session is closed either way.
    """
    session = session_factory()
    try:
        async with session.begin():
            yield session
    finally:
        await session.close()


__all__ = ["transaction"]
