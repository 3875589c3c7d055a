"""
Client-side request throttling.

A token bucket refilled at the account's request rate. Parallel tile
fetches share one limiter across worker threads, so every bucket update
happens under a lock. Callers that find the bucket empty sleep with
exponential backoff and give up with RateLimitError after a fixed number
of waits.
"""

import threading
import time

from ..config.logger_module import log_debug
from .base_errors import RateLimitError


INITIAL_BACKOFF = 0.1


class TokenBucketRateLimiter:
    """Thread-safe token bucket; one token per request."""

    def __init__(self,
                 rate_per_second: float = 10.0,
                 burst_capacity: int = 20,
                 retry_attempts: int = 5,
                 backoff_factor: float = 2.0):
        """
        Args:
            rate_per_second: Sustained request rate
            burst_capacity: Requests allowed back to back from a full bucket
            retry_attempts: Waits before wait_for_token gives up
            backoff_factor: Growth of the minimum wait between attempts
        """
        if rate_per_second <= 0:
            raise ValueError(f"rate_per_second must be positive, got {rate_per_second}")
        if burst_capacity < 1:
            raise ValueError(f"burst_capacity must be at least 1, got {burst_capacity}")

        self.rate_per_second = rate_per_second
        self.burst_capacity = burst_capacity
        self.retry_attempts = retry_attempts
        self.backoff_factor = backoff_factor

        self.tokens = float(burst_capacity)
        self._stamp = time.monotonic()
        self._lock = threading.Lock()

    def _refill(self) -> None:
        # Caller holds the lock
        now = time.monotonic()
        self.tokens = min(self.burst_capacity, self.tokens + (now - self._stamp) * self.rate_per_second)
        self._stamp = now

    def _take(self, count: int) -> float:
        """Take ``count`` tokens if present; otherwise return the seconds until they are."""
        with self._lock:
            self._refill()
            if self.tokens >= count:
                self.tokens -= count
                return 0.0
            return (count - self.tokens) / self.rate_per_second

    def acquire(self, tokens_needed: int = 1) -> bool:
        """Take tokens without waiting; False if the bucket is short."""
        return self._take(tokens_needed) == 0.0

    def wait_for_token(self, tokens_needed: int = 1) -> None:
        """
        Block until ``tokens_needed`` tokens could be taken.

        Raises:
            RateLimitError: If the request exceeds the burst capacity, or
                tokens are still short after ``retry_attempts`` waits
        """
        if tokens_needed > self.burst_capacity:
            raise RateLimitError(
                f"{tokens_needed} tokens requested, burst capacity is {self.burst_capacity}"
            )

        backoff = INITIAL_BACKOFF
        for attempt in range(1, self.retry_attempts + 1):
            shortfall = self._take(tokens_needed)
            if shortfall == 0.0:
                return

            delay = max(backoff, shortfall)
            log_debug(f"Rate limited, waiting {delay:.2f}s (attempt {attempt}/{self.retry_attempts})")
            time.sleep(delay)
            backoff *= self.backoff_factor

        if self._take(tokens_needed) != 0.0:
            raise RateLimitError(
                f"Failed to acquire {tokens_needed} token(s) after {self.retry_attempts} attempts"
            )

    @property
    def available_tokens(self) -> float:
        with self._lock:
            self._refill()
            return self.tokens

    def get_wait_time(self, tokens_needed: int = 1) -> float:
        """Seconds until ``tokens_needed`` tokens are available (0 if now)."""
        with self._lock:
            self._refill()
            return max(0.0, (tokens_needed - self.tokens) / self.rate_per_second)
