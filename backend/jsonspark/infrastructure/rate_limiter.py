"""Fixed Window Rate Limiter: per-client admission counters held in process memory.

Invariants:
    - Windows are aligned to multiples of window_seconds on the clock
    - A client gets at most max_requests admissions per window
    - Counters from closed windows are dropped when a new window opens

Design Decisions:
    - No lock: hit() runs on the event loop with no await between read and write
    - In-memory over Redis: single-process uvicorn, limits reset on restart
"""

import math
import time
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitDecision:
    """Result of one admission check."""
    allowed: bool
    limit: int
    remaining: int
    reset_after: int

    def headers(self) -> dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_after),
        }


class FixedWindowRateLimiter:
    """Counts requests per key inside fixed, clock-aligned windows."""

    def __init__(
        self, max_requests: int, window_seconds: int,
        clock: Callable[[], float] = time.time,
    ):
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._window_start: float | None = None
        self._counts: dict[str, int] = {}

    def _roll_window(self, now: float) -> float:
        window_start = (now // self.window_seconds) * self.window_seconds
        if window_start != self._window_start:
            self._window_start = window_start
            self._counts.clear()
        return window_start

    def hit(self, key: str) -> RateLimitDecision:
        """Record one request for key and decide whether to admit it."""
        now = self._clock()
        window_start = self._roll_window(now)
        reset_after = max(1, math.ceil(window_start + self.window_seconds - now))

        count = self._counts.get(key, 0) + 1
        self._counts[key] = count
        return RateLimitDecision(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - count),
            reset_after=reset_after,
        )

    def reset(self) -> None:
        self._window_start = None
        self._counts.clear()
