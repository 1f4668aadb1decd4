"""
Time Sources
=============
Cooldowns and spawn intervals read time through a Clock so tests can
drive simulated time without sleeping.
"""

import time


class MonotonicClock:
    """Wall clock in seconds, backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        """Move time forward by the given number of seconds."""
        self._now += seconds

    def set(self, seconds: float) -> None:
        self._now = seconds


# "Never happened": elapsed time since this is always larger than any cooldown
NEVER = float('-inf')
