"""Config settings – BlocklistSettings."""
from __future__ import annotations

import dataclasses
import logging
from datetime import timedelta
from typing import ClassVar

from blocked_numbers.config.settings.base import Settings
from blocked_numbers.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class BlocklistSettings(Settings):
    """Runtime settings, read from ``BLOCKLIST_*`` environment variables.

    ``default_country_iso`` pins the country used to interpret national
    numbers; leave it empty to detect it from the process locale.

    ``notifier_queue_size`` bounds each observer's pending change events.
    The default 0 is unbounded and every observer sees one event per
    mutation. With a bound, an event offered to a full queue is dropped, so
    a slow observer may see fewer events than mutations. It still wakes up
    for the event already queued and rereads the current state.
    """

    _prefix: ClassVar[str] = "BLOCKLIST"

    database_url: str = "sqlite+aiosqlite:///blocked_numbers.db"
    default_country_iso: str = ""
    suppression_minutes: int = 60
    notifier_queue_size: int = 0
    log_level: str = "INFO"

    def _validate(self) -> None:
        if not self.database_url:
            raise InvalidSettingValueError("database_url", self.database_url, "must not be empty")
        iso = self.default_country_iso.strip()
        if iso and (len(iso) != 2 or not iso.isalpha()):
            raise InvalidSettingValueError(
                "default_country_iso", self.default_country_iso, "expected a two-letter ISO code"
            )
        self.default_country_iso = iso.upper()
        if self.suppression_minutes <= 0:
            raise InvalidSettingValueError("suppression_minutes", self.suppression_minutes, "must be positive")
        if self.notifier_queue_size < 0:
            raise InvalidSettingValueError("notifier_queue_size", self.notifier_queue_size, "must not be negative")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown log level")
        self.log_level = self.log_level.upper()

    @property
    def suppression_duration(self) -> timedelta:
        return timedelta(minutes=self.suppression_minutes)


__all__ = ["BlocklistSettings"]
