"""Application blocklist – record store, match engine, provider and suppression."""
from blocked_numbers.application.blocklist.matcher import MatchEngine, MatchTier
from blocked_numbers.application.blocklist.provider import BlockedNumberProvider
from blocked_numbers.application.blocklist.store import BlockedNumberStore
from blocked_numbers.application.blocklist.suppression import (
    SUPPRESSION_TOPIC,
    BlockSuppression,
    BlockSuppressionStatus,
)

__all__ = [
    "BlockSuppression",
    "BlockSuppressionStatus",
    "BlockedNumberProvider",
    "BlockedNumberStore",
    "MatchEngine",
    "MatchTier",
    "SUPPRESSION_TOPIC",
]
