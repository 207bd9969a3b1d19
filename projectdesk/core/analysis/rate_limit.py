"""Fixed-window request limiter for outbound AI calls."""

import logging
import threading
import time
from typing import Callable, Dict

from ..constants import DEFAULT_RATE_LIMIT_MAX_REQUESTS, DEFAULT_RATE_LIMIT_WINDOW_SECONDS
from .errors import RateLimitExceeded

logger = logging.getLogger(__name__)


class RateLimitWindow:
    """Counts requests in a fixed window and refuses once the budget is spent.

    The counter is shared by every request served by the owning AIClient,
    so read-then-increment happens under a lock.
    """

    def __init__(
        self,
        max_requests: int = DEFAULT_RATE_LIMIT_MAX_REQUESTS,
        window_seconds: float = DEFAULT_RATE_LIMIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self.request_count = 0
        self.window_start = clock()

    def acquire(self) -> None:
        """Consume one request slot or raise RateLimitExceeded."""
        with self._lock:
            now = self._clock()
            if now - self.window_start > self.window_seconds:
                self.request_count = 0
                self.window_start = now

            if self.request_count >= self.max_requests:
                logger.warning(
                    f"AI rate limit reached: {self.request_count}/{self.max_requests} "
                    f"in {self.window_seconds:.0f}s window"
                )
                raise RateLimitExceeded(
                    "Rate limit exceeded. Please wait a moment."
                )

            self.request_count += 1

    def snapshot(self) -> Dict:
        """Thread-safe view of the current window."""
        with self._lock:
            elapsed = self._clock() - self.window_start
            return {
                "request_count": self.request_count,
                "max_requests": self.max_requests,
                "window_seconds": self.window_seconds,
                "window_elapsed_seconds": round(max(elapsed, 0.0), 3),
            }
