"""Implementation of the outbound request rate limiter.

Controls the frequency of outgoing requests so the client stays under the API's
rate limit. Uses a sliding window of grant timestamps protected by a lock, so a
single limiter can be shared by every thread using a client.
"""

import collections
import logging
import time
from threading import Lock
from typing import Callable, Deque

from cmsclient.domain.interfaces.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

# Observed API configuration: 10 requests per second.
DEFAULT_MAX_REQUESTS = 10
DEFAULT_TIME_WINDOW_SECONDS = 1.0


class SlidingWindowRateLimiter(RateLimiter):
    """Grants at most `max_requests` permits within any `time_window` seconds."""

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        time_window: float = DEFAULT_TIME_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initializes the rate limiter.

        Args:
            max_requests: Maximum number of requests allowed within the window.
            time_window: The duration of the sliding window in seconds.
            clock: Monotonic clock, injectable for tests.
            sleep: Blocking sleep, injectable for tests.
        """
        if max_requests <= 0 or time_window <= 0:
            raise ValueError("Max requests and time window must be positive.")

        self.max_requests = max_requests
        self.time_window = time_window
        self.timestamps: Deque[float] = collections.deque()
        self._clock = clock
        self._sleep = sleep
        self._lock = Lock()
        logger.debug(f"RateLimiter initialized: Max {self.max_requests} requests / {self.time_window} seconds.")

    def _prune_timestamps(self, now: float) -> None:
        """Removes timestamps that have slid out of the window."""
        while self.timestamps and self.timestamps[0] <= now - self.time_window:
            self.timestamps.popleft()

    def _wait_needed(self, now: float) -> float:
        oldest = self.timestamps[0]
        return max(0.0, self.time_window - (now - oldest))

    def can_request(self) -> bool:
        """Checks if a request could be made right now without waiting."""
        with self._lock:
            self._prune_timestamps(self._clock())
            return len(self.timestamps) < self.max_requests

    def wait_time(self) -> float:
        """Seconds until the next permit would be granted; 0 if one is available now."""
        with self._lock:
            now = self._clock()
            self._prune_timestamps(now)
            if len(self.timestamps) < self.max_requests:
                return 0.0
            return self._wait_needed(now)

    def acquire(self) -> None:
        """Blocks until a permit is granted, then records it."""
        while True:
            with self._lock:
                now = self._clock()
                self._prune_timestamps(now)
                if len(self.timestamps) < self.max_requests:
                    self.timestamps.append(now)
                    return
                wait_time = self._wait_needed(now)

            # Sleep outside the lock so other threads can still inspect the window.
            logger.debug(f"Rate limit reached. Waiting for {wait_time:.3f} seconds.")
            self._sleep(wait_time)


class NoOpRateLimiter(RateLimiter):
    """Grants every request immediately."""

    def acquire(self) -> None:
        return None
