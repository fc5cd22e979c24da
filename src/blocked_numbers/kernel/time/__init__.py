"""Kernel time – Clock port + implementations."""
from blocked_numbers.kernel.time.clock import Clock, FrozenClock, SystemClock

__all__ = ["Clock", "FrozenClock", "SystemClock"]
