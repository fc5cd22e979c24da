"""Application blocklist – MatchEngine.

Answers "is this number blocked?" by probing the table with progressively
looser keys and stopping at the first hit:

1. the query verbatim against ``original_number``
2. its E.164 form against ``e164_number``
3. its digits-only form against ``stripped_number``

The E.164 form is derived with the *current* country only. A number blocked
while the device was in another country is not re-interpreted with that
country; such numbers stay unmatched rather than guessed at.
"""

from __future__ import annotations

from enum import Enum

from blocked_numbers.kernel.blocklist import (
    COLUMN_E164_NUMBER,
    COLUMN_ORIGINAL_NUMBER,
    COLUMN_STRIPPED_NUMBER,
    BlockedNumberReader,
)
from blocked_numbers.kernel.phone import Normalizer
from blocked_numbers.observability.logging import get_logger

logger = get_logger(__name__)


class MatchTier(str, Enum):
    """Which key produced a match."""

    ORIGINAL = COLUMN_ORIGINAL_NUMBER
    E164 = COLUMN_E164_NUMBER
    STRIPPED = COLUMN_STRIPPED_NUMBER


class MatchEngine:
    """Read-only membership test over a :class:`BlockedNumberReader`."""

    def __init__(self, reader: BlockedNumberReader, normalizer: Normalizer) -> None:
        self._reader = reader
        self._normalizer = normalizer

    async def match(self, query: str | None) -> MatchTier | None:
        """Return the tier that matched *query*, or ``None``."""
        if not query:
            return None
        if await self._reader.exists(COLUMN_ORIGINAL_NUMBER, query):
            return MatchTier.ORIGINAL

        keys = self._normalizer.normalize(query)
        if keys.e164 is not None and await self._reader.exists(COLUMN_E164_NUMBER, keys.e164):
            return MatchTier.E164
        # An empty projection (e.g. from an email-style id) must never match.
        if keys.stripped and await self._reader.exists(COLUMN_STRIPPED_NUMBER, keys.stripped):
            return MatchTier.STRIPPED
        return None

    async def is_blocked(self, query: str | None) -> bool:
        tier = await self.match(query)
        if tier is not None:
            logger.debug("blocked_number.matched", tier=tier.value, query=query)
        return tier is not None


__all__ = ["MatchEngine", "MatchTier"]
