"""Application notifications – change broadcast to registered observers."""
from blocked_numbers.application.notifications.notifier import (
    DEFAULT_TOPIC,
    ChangeEvent,
    ChangeNotifier,
    Observer,
    Subscription,
)

__all__ = ["ChangeEvent", "ChangeNotifier", "DEFAULT_TOPIC", "Observer", "Subscription"]
