"""Testing fakes – in-memory doubles for kernel ports."""
from blocked_numbers.kernel.time import FrozenClock
from blocked_numbers.testing.fakes.authorizer import FakeAuthorizer
from blocked_numbers.testing.fakes.clock import FakeClock
from blocked_numbers.testing.fakes.country import FakeCountryDetector
from blocked_numbers.testing.fakes.table import InMemoryBlockedNumberTable

__all__ = [
    "FakeAuthorizer",
    "FakeClock",
    "FakeCountryDetector",
    "FrozenClock",
    "InMemoryBlockedNumberTable",
]
