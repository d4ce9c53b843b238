from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Monotonic time source.

    Game logic reads time only through this interface so that alert timing
    can be driven by a fake clock in tests.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Production clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class Countdown:
    """A fixed-length timer started at construction."""

    def __init__(self, clock: Clock, duration_s: float) -> None:
        if duration_s < 0.0:
            raise ValueError("duration_s must be >= 0")
        self._clock = clock
        self._duration_s = float(duration_s)
        self._started_at_s = clock.now()

    def remaining_s(self) -> float:
        elapsed = self._clock.now() - self._started_at_s
        return max(0.0, self._duration_s - elapsed)

    def expired(self) -> bool:
        return self.remaining_s() <= 0.0
