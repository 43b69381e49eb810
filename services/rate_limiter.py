"""
services/rate_limiter.py

Responsibility: Process-wide token bucket that admits or rejects incoming
update requests and reports how long a rejected client should wait.
Does NOT: block callers, know about HTTP, or track clients individually.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_RATE = 0.01
DEFAULT_BURST = 1


@dataclass(frozen=True)
class RateLimitDecision:
    """Result of one admission check."""

    allowed: bool

    # Whole seconds until a token is available; 0 when allowed
    retry_after: int = 0


class TokenBucket:
    """
    Token bucket with continuous refill.

    The bucket starts full. Each admitted request consumes one token; a
    rejected request consumes nothing. The tokens and last-refill pair is
    read and written under a lock, so one bucket can be shared by every
    request handler of the process.
    """

    def __init__(
        self,
        rate: float = DEFAULT_RATE,
        burst: int = DEFAULT_BURST,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialise token bucket

        Args:
            rate: Tokens per second to add; must be positive
            burst: Maximum tokens in bucket; must be at least 1
            clock: Monotonic time source in seconds
        """
        if rate <= 0:
            raise ValueError(f"rate must be positive, got {rate}")
        if burst < 1:
            raise ValueError(f"burst must be at least 1, got {burst}")

        self.rate = float(rate)
        self.burst = int(burst)
        self._clock = clock
        self._tokens = float(burst)
        self._last_update = clock()
        self._lock = threading.Lock()

    @property
    def tokens(self) -> float:
        with self._lock:
            self._refill()
            return self._tokens

    def acquire(self) -> RateLimitDecision:
        """
        Try to take one token from the bucket.

        Returns:
            An allowed decision if a token was available, otherwise a
            rejection carrying the wait until one token accrues, rounded
            up to whole seconds.
        """
        with self._lock:
            self._refill()

            if self._tokens >= 1:
                self._tokens -= 1
                return RateLimitDecision(allowed=True)

            delay = (1 - self._tokens) / self.rate

        retry_after = max(1, math.ceil(delay))
        logger.info("Rate limit exceeded; retry after %d s", retry_after)
        return RateLimitDecision(allowed=False, retry_after=retry_after)

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._last_update)
        self._last_update = now
        self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate)
