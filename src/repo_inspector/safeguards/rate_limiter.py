"""Client-side rate limiting for GitHub REST calls.

The limiter is a local approximation of GitHub's request budget: a fixed
number of requests per window plus a minimum spacing between consecutive
requests. It is advisory only and never raises; the client reconciles it with
the authoritative ``X-RateLimit-*`` headers after every response.

One limiter is owned by each GitHubClient, so independent analysis runs in
the same process do not share counters.
"""

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Fixed-window request budget with minimum inter-request spacing.

    Logic:
    - A window opens on first use and lasts ``window_seconds``
    - At most ``max_requests`` requests per window
    - Consecutive requests are at least ``min_interval`` seconds apart
    """

    def __init__(
        self,
        max_requests: int = 60,
        window_seconds: float = 60.0,
        min_interval: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.min_interval = min_interval
        self._clock = clock
        self._wall_clock = wall_clock

        self.request_count = 0
        self.window_reset_at: Optional[float] = None
        self.last_request_at: Optional[float] = None

    def _roll_window(self, now: float) -> None:
        if self.window_reset_at is None or now >= self.window_reset_at:
            self.request_count = 0
            self.window_reset_at = now + self.window_seconds

    def _spacing_remaining(self, now: float) -> float:
        if self.last_request_at is None:
            return 0.0
        return max(0.0, self.min_interval - (now - self.last_request_at))

    def can_proceed(self) -> bool:
        """Check whether a request may be sent right now."""
        now = self._clock()
        self._roll_window(now)

        if self._spacing_remaining(now) > 0:
            return False

        return self.request_count < self.max_requests

    def record_request(self) -> None:
        """Consume one unit of budget."""
        now = self._clock()
        self._roll_window(now)
        self.last_request_at = now
        self.request_count += 1

    def time_until_next_slot(self) -> float:
        """Seconds the caller must wait before ``can_proceed()`` is True."""
        now = self._clock()
        self._roll_window(now)

        spacing = self._spacing_remaining(now)
        if spacing > 0:
            return spacing

        if self.request_count >= self.max_requests:
            return max(0.0, self.window_reset_at - now)

        return 0.0

    def wait_for_slot(self, sleep: Callable[[float], None] = time.sleep) -> float:
        """Block until a request may be sent. Returns seconds waited."""
        delay = self.time_until_next_slot()
        if delay > 0:
            logger.debug(f"Rate limiter: waiting {delay:.2f}s before next request")
            sleep(delay)
        return delay

    def apply_server_feedback(
        self,
        remaining: Optional[int] = None,
        reset_epoch: Optional[float] = None,
    ) -> None:
        """
        Reconcile local counters with GitHub's ``X-RateLimit-*`` headers.

        Args:
            remaining: Requests left in the server's window
            reset_epoch: Wall-clock epoch second at which the server window resets
        """
        now = self._clock()
        self._roll_window(now)

        if remaining is not None and remaining >= 0:
            self.request_count = max(0, self.max_requests - remaining)

        if reset_epoch is not None and reset_epoch > 0:
            self.window_reset_at = now + (reset_epoch - self._wall_clock())
