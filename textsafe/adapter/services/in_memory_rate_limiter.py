"""
In-process fixed-window rate limiter.

Counters live in this process only and are lost on restart; separate
processes do not share them. Best-effort protection.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict

from textsafe.app.services.rate_limiter import RateLimiter, RateLimitResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_TRACKED_KEYS = 10_000


@dataclass
class _Window:
    count: int
    reset_time: float


class InMemoryRateLimiter(RateLimiter):
    """
    Fixed-window counter per key.

    - A key with no record, or whose window has passed, starts a new window
      with count=1
    - At max_requests further hits are rejected without incrementing
    - Once more than max_tracked_keys are tracked, the hit that crossed the
      threshold purges every key whose window has passed
    """

    def __init__(
        self,
        max_tracked_keys: int = DEFAULT_MAX_TRACKED_KEYS,
        clock: Callable[[], float] = time.time,
    ):
        self.max_tracked_keys = max_tracked_keys
        self.clock = clock
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._windows)

    def hit(self, key: str, max_requests: int, window_seconds: float) -> RateLimitResult:
        with self._lock:
            now = self.clock()
            window = self._windows.get(key)

            if window is None or now > window.reset_time:
                window = _Window(count=1, reset_time=now + window_seconds)
                self._windows[key] = window

                if len(self._windows) > self.max_tracked_keys:
                    self._purge_expired(now)

                return RateLimitResult(
                    allowed=True,
                    remaining=max_requests - 1,
                    reset_time=window.reset_time,
                )

            if window.count >= max_requests:
                return RateLimitResult(
                    allowed=False, remaining=0, reset_time=window.reset_time
                )

            window.count += 1
            return RateLimitResult(
                allowed=True,
                remaining=max_requests - window.count,
                reset_time=window.reset_time,
            )

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, w in self._windows.items() if now > w.reset_time]
        for key in expired:
            del self._windows[key]
        logger.debug(f"Purged {len(expired)} expired rate-limit window(s)")
