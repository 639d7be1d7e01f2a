"""Rate limiter for page downloads."""

from __future__ import annotations

import time
from typing import Callable


class RateLimiter:
    """Token bucket that blocks until a request may go out.

    Args:
        requests_per_second: Refill rate of the bucket.
        burst: Bucket capacity (defaults to requests_per_second, at least 1).
        clock: Monotonic time source.
        sleep: Called with the number of seconds to wait.
    """

    def __init__(
        self,
        requests_per_second: float = 2.0,
        burst: int | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")
        self.rate = requests_per_second
        self.burst = burst or max(1, int(requests_per_second))
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(self.burst)
        self._updated = clock()

    def _refill(self) -> None:
        now = self._clock()
        self._tokens = min(self.burst, self._tokens + (now - self._updated) * self.rate)
        self._updated = now

    def wait(self) -> None:
        """Take one token, sleeping first if the bucket is empty."""
        self._refill()
        if self._tokens < 1:
            self._sleep((1 - self._tokens) / self.rate)
            self._refill()
        self._tokens = max(0.0, self._tokens - 1)
