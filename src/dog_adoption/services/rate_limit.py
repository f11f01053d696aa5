"""Fixed-window request rate limiting."""

import math
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of counting one request against a window."""

    allowed: bool
    limit: int
    remaining: int
    reset_at: datetime
    reset_after_seconds: int


class RateLimiter(Protocol):
    """Rate limiter interface keyed by client identity."""

    def hit(self, key: str) -> RateLimitDecision:
        """Count a request for key and report whether it is allowed."""


@dataclass
class _Window:
    count: int
    reset_at: datetime


class InMemoryRateLimiter(RateLimiter):
    """In-process fixed-window counter per key."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.max_requests = max_requests
        self.window = timedelta(seconds=window_seconds)
        self._clock = clock or (lambda: datetime.now(tz=UTC))
        self._windows: dict[str, _Window] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> RateLimitDecision:
        """Count a request for key within the current window."""
        now = self._clock()
        with self._lock:
            self._prune(now)
            window = self._windows.get(key)
            if window is None:
                window = _Window(count=0, reset_at=now + self.window)
                self._windows[key] = window
            window.count += 1
            return RateLimitDecision(
                allowed=window.count <= self.max_requests,
                limit=self.max_requests,
                remaining=max(self.max_requests - window.count, 0),
                reset_at=window.reset_at,
                reset_after_seconds=_seconds_between(now, window.reset_at),
            )

    def _prune(self, now: datetime) -> None:
        expired = [key for key, entry in self._windows.items() if now >= entry.reset_at]
        for key in expired:
            self._windows.pop(key, None)


def _seconds_between(start: datetime, end: datetime) -> int:
    return max(math.ceil((end - start).total_seconds()), 0)
