"""Application blocklist – BlockSuppression.

After the user contacts emergency services, blocking is suspended for a
while so that call-backs get through. The system-side screening decision
(:meth:`BlockSuppression.should_system_block_number`) honours that window;
plain membership tests do not.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta

from blocked_numbers.application.blocklist.matcher import MatchEngine
from blocked_numbers.application.notifications import ChangeNotifier
from blocked_numbers.kernel.time import Clock, SystemClock
from blocked_numbers.observability.logging import get_logger

logger = get_logger(__name__)

SUPPRESSION_TOPIC = "block_suppression"


@dataclasses.dataclass(frozen=True)
class BlockSuppressionStatus:
    is_suppressed: bool
    until: datetime | None = None


class BlockSuppression:
    """Tracks the emergency-contact suppression window."""

    def __init__(
        self,
        matcher: MatchEngine,
        duration: timedelta,
        clock: Clock | None = None,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        if duration <= timedelta(0):
            raise ValueError("suppression duration must be positive")
        self._matcher = matcher
        self._duration = duration
        self._clock = clock or SystemClock()
        self._notifier = notifier
        self._last_emergency_contact: datetime | None = None

    def get_block_suppression_status(self) -> BlockSuppressionStatus:
        if self._last_emergency_contact is None:
            return BlockSuppressionStatus(is_suppressed=False)
        until = self._last_emergency_contact + self._duration
        if self._clock.now() >= until:
            return BlockSuppressionStatus(is_suppressed=False)
        return BlockSuppressionStatus(is_suppressed=True, until=until)

    def notify_emergency_contact(self) -> BlockSuppressionStatus:
        """Start (or restart) the suppression window from now."""
        self._last_emergency_contact = self._clock.now()
        status = self.get_block_suppression_status()
        logger.info("block_suppression.started", until=status.until.isoformat() if status.until else None)
        self._notify()
        return status

    def end_block_suppression(self) -> None:
        """End suppression early. No-op when nothing is suppressed."""
        was_suppressed = self.get_block_suppression_status().is_suppressed
        self._last_emergency_contact = None
        if was_suppressed:
            logger.info("block_suppression.ended")
            self._notify()

    async def should_system_block_number(self, number: str | None) -> bool:
        if self.get_block_suppression_status().is_suppressed:
            return False
        return await self._matcher.is_blocked(number)

    def _notify(self) -> None:
        if self._notifier is not None:
            self._notifier.notify_changed()


__all__ = ["BlockSuppression", "BlockSuppressionStatus", "SUPPRESSION_TOPIC"]
