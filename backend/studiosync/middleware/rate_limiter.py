# backend/studiosync/middleware/rate_limiter.py
"""
Rate limiting for the StudioSync API.

Fixed-window counters kept in process memory, one per client identifier.
The counter table is the only in-process state the API holds, so every
access goes through a lock.
"""

from dataclasses import dataclass
import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

from ..core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class RateLimitResult:
    """Outcome of one rate limit check."""

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after: int


class RateLimiter:
    """
    Core rate limiting logic using a fixed window.

    Each identifier gets ``limit`` requests per ``window_seconds``; the window
    starts with the first request and is replaced once it has expired.
    """

    def __init__(
        self,
        limit: Optional[int] = None,
        window_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.limit = limit if limit is not None else settings.rate_limit_max_requests
        self.window_seconds = (
            window_seconds if window_seconds is not None else settings.rate_limit_window_seconds
        )
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._lock = threading.Lock()

    def check(self, identifier: str) -> RateLimitResult:
        """
        Count one request for ``identifier``.

        Returns:
            RateLimitResult; ``allowed`` is False once the window is exhausted
        """
        now = self._clock()
        with self._lock:
            window_start, count = self._windows.get(identifier, (now, 0))
            if now - window_start >= self.window_seconds:
                window_start, count = now, 0

            reset_at = window_start + self.window_seconds
            if count >= self.limit:
                retry_after = max(1, int(reset_at - now + 0.999))
                return RateLimitResult(False, self.limit, 0, int(reset_at), retry_after)

            count += 1
            self._windows[identifier] = (window_start, count)
            if len(self._windows) > 10_000:
                self._prune(now)

        return RateLimitResult(True, self.limit, self.limit - count, int(reset_at), 0)

    def reset(self, identifier: Optional[str] = None) -> None:
        """Forget one identifier's window, or all of them."""
        with self._lock:
            if identifier is None:
                self._windows.clear()
            else:
                self._windows.pop(identifier, None)

    def _prune(self, now: float) -> None:
        expired = [
            key
            for key, (window_start, _) in self._windows.items()
            if now - window_start >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
        logger.debug(f"Pruned {len(expired)} expired rate limit windows")
