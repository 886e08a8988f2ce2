"""Sliding window rate limiting for tool calls.

A single limiter guards the whole process: every tool call, whatever its
name, is counted against the same window. Timestamps are pruned lazily on
each query.
"""

import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Optional

from sealion_mcp.app.core.logging import get_logger

logger = get_logger(__name__)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass
class RateLimitResult:
    """Result of a rate limit check."""
    allowed: bool
    limit: int
    remaining: int
    retry_after_ms: Optional[float] = None


class SlidingWindowRateLimiter:
    """In-memory sliding window limiter.

    Keeps one timestamp per admitted request. A request is admitted when
    fewer than ``max_requests`` timestamps fall inside the trailing
    ``window_ms`` interval.

    Check-and-reserve in :meth:`allow_request` runs under a lock, so the
    limiter stays correct if calls ever arrive from several threads.
    """

    def __init__(
        self,
        max_requests: int = 10,
        window_ms: float = 60_000,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize rate limiter.

        Args:
            max_requests: Maximum admitted requests inside one window
            window_ms: Window length in milliseconds
            clock: Millisecond clock, monotonic by default (injectable for tests)
        """
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_ms <= 0:
            raise ValueError("window_ms must be positive")
        self.max_requests = max_requests
        self.window_ms = window_ms
        self._clock = clock or _monotonic_ms
        self._timestamps: Deque[float] = deque()
        self._lock = threading.Lock()

    def _prune(self, now: float) -> None:
        # Timestamps are appended in clock order, so the oldest sit on the left.
        while self._timestamps and now - self._timestamps[0] >= self.window_ms:
            self._timestamps.popleft()

    def allow_request(self) -> bool:
        """Admit the request and reserve a slot, or deny without side effects."""
        with self._lock:
            now = self._clock()
            self._prune(now)
            if len(self._timestamps) < self.max_requests:
                self._timestamps.append(now)
                return True
            return False

    def check(self) -> RateLimitResult:
        """Same as :meth:`allow_request`, with limit metadata attached."""
        allowed = self.allow_request()
        remaining = self.remaining()
        if allowed:
            return RateLimitResult(allowed=True, limit=self.max_requests, remaining=remaining)
        retry_after = self.time_until_reset()
        logger.warning(
            f"Rate limit exceeded: {self.max_requests} requests per {self.window_ms:.0f}ms, "
            f"retry after {retry_after:.0f}ms"
        )
        return RateLimitResult(
            allowed=False,
            limit=self.max_requests,
            remaining=remaining,
            retry_after_ms=retry_after,
        )

    def current_count(self) -> int:
        """Number of admitted requests still inside the window."""
        with self._lock:
            self._prune(self._clock())
            return len(self._timestamps)

    def remaining(self) -> int:
        return max(0, self.max_requests - self.current_count())

    def time_until_reset(self) -> float:
        """Milliseconds until the oldest slot frees up (0 when nothing is held)."""
        with self._lock:
            if not self._timestamps:
                return 0.0
            oldest = self._timestamps[0]
            return max(0.0, (oldest + self.window_ms) - self._clock())

    def reset(self) -> None:
        """Forget all admission history."""
        with self._lock:
            self._timestamps.clear()
