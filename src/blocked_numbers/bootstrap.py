"""Composition root – wire the blocklist from settings.

Usage::

    blocklist = build_blocklist(BlocklistSettings(default_country_iso="US"))
    await blocklist.start()
    await blocklist.provider.insert(CONTENT_REF, {"original_number": "+1-500-454-1111"})
    assert await blocklist.matcher.is_blocked("1 500-454 1111")
    await blocklist.close()
"""

from __future__ import annotations

import dataclasses

from blocked_numbers.adapters.sqlalchemy import SqlAlchemyBlockedNumberTable
from blocked_numbers.application.blocklist import (
    SUPPRESSION_TOPIC,
    BlockedNumberProvider,
    BlockedNumberStore,
    BlockSuppression,
    MatchEngine,
)
from blocked_numbers.application.notifications import ChangeNotifier
from blocked_numbers.config import BlocklistSettings, EnvSettingsLoader
from blocked_numbers.kernel.blocklist import BlockedNumberTable
from blocked_numbers.kernel.phone import (
    CountryDetector,
    FixedCountryDetector,
    LocaleCountryDetector,
    Normalizer,
)
from blocked_numbers.kernel.security import Authorizer
from blocked_numbers.kernel.time import Clock
from blocked_numbers.observability.logging import configure_logging, get_logger

logger = get_logger(__name__)


@dataclasses.dataclass
class Blocklist:
    """Every wired component, plus start/close for the backend and notifiers."""

    settings: BlocklistSettings
    table: BlockedNumberTable
    notifier: ChangeNotifier
    suppression_notifier: ChangeNotifier
    normalizer: Normalizer
    store: BlockedNumberStore
    matcher: MatchEngine
    provider: BlockedNumberProvider
    suppression: BlockSuppression

    async def start(self) -> None:
        await self.table.create_schema()
        logger.info("blocklist.started", database_url=self.settings.database_url)

    async def close(self) -> None:
        await self.notifier.close()
        await self.suppression_notifier.close()
        await self.table.close()
        logger.info("blocklist.closed")


def default_country_detector(settings: BlocklistSettings) -> CountryDetector:
    if settings.default_country_iso:
        return FixedCountryDetector(settings.default_country_iso)
    return LocaleCountryDetector()


def build_blocklist(
    settings: BlocklistSettings | None = None,
    *,
    table: BlockedNumberTable | None = None,
    country_detector: CountryDetector | None = None,
    authorizer: Authorizer | None = None,
    clock: Clock | None = None,
    configure_logs: bool = False,
) -> Blocklist:
    """Assemble a :class:`Blocklist`.

    Settings default to ``BLOCKLIST_*`` environment variables. Any
    capability may be substituted, e.g. an in-memory table in tests.
    With *configure_logs* the process-wide JSON logging is set up at
    ``settings.log_level``.
    """
    settings = settings or EnvSettingsLoader().load(BlocklistSettings)
    if configure_logs:
        configure_logging(settings.log_level)
    table = table or SqlAlchemyBlockedNumberTable.from_url(settings.database_url)
    notifier = ChangeNotifier(maxsize=settings.notifier_queue_size)
    suppression_notifier = ChangeNotifier(topic=SUPPRESSION_TOPIC, maxsize=settings.notifier_queue_size)
    normalizer = Normalizer(country_detector or default_country_detector(settings))
    store = BlockedNumberStore(table, normalizer, notifier)
    matcher = MatchEngine(table, normalizer)
    return Blocklist(
        settings=settings,
        table=table,
        notifier=notifier,
        suppression_notifier=suppression_notifier,
        normalizer=normalizer,
        store=store,
        matcher=matcher,
        provider=BlockedNumberProvider(store, matcher, authorizer),
        suppression=BlockSuppression(
            matcher,
            settings.suppression_duration,
            clock=clock,
            notifier=suppression_notifier,
        ),
    )


__all__ = ["Blocklist", "build_blocklist", "default_country_detector"]
