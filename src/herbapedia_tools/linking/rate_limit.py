"""Minimum-interval pacing for outbound requests."""

from __future__ import annotations

import time
from typing import Callable

from herbapedia_tools.core.exceptions import ConfigurationError


class RateLimiter:
    """Blocks until ``min_interval`` seconds have passed since the previous call."""

    def __init__(
        self,
        min_interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if min_interval <= 0:
            raise ConfigurationError("Rate limit interval must be greater than zero")
        self.min_interval = float(min_interval)
        self._clock = clock
        self._sleep = sleep
        self._last: float | None = None

    def wait(self) -> float:
        """Sleep as needed and return the number of seconds slept."""
        now = self._clock()
        slept = 0.0
        if self._last is not None:
            remaining = self.min_interval - (now - self._last)
            if remaining > 0:
                self._sleep(remaining)
                slept = remaining
                now = self._clock()
        self._last = now
        return slept
