"""Sliding-window rate limiting for outgoing MercadoLibre API calls."""

import logging
import time
from collections import deque
from threading import RLock
from typing import Any, Callable, Optional

from ..constants import DEFAULT_MAX_REQUESTS, DEFAULT_SAFETY_MARGIN, DEFAULT_WINDOW_SECONDS
from ..exceptions import InvalidArgumentError, InvalidConfigurationError
from .validators import validate_positive_integer

logger = logging.getLogger(__name__)

RateLimitObserver = Callable[[float, int, int], Any]


class SlidingWindowRateLimiter:
    """Admission control over a trailing time window.

    Every admitted call is recorded as one timestamp in the call log. Looking
    back from any moment, at most ``max_requests`` timestamps fall inside the
    last ``window_seconds``. When the budget is spent, ``acquire`` blocks the
    calling thread until the oldest entry leaves the window.

    The wait is ``window_seconds - (now - oldest)`` plus ``safety_margin``.
    The default margin of one second is a deliberate conservative bias for
    clocks truncated to whole seconds, not a rounding error. A margin of zero
    is allowed with sub-second clocks; admission still never happens before
    the window has actually elapsed.
    """

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window_seconds: int = DEFAULT_WINDOW_SECONDS,
        safety_margin: float = DEFAULT_SAFETY_MARGIN,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            max_requests: Maximum number of calls admitted per window
            window_seconds: Length of the trailing window in seconds
            safety_margin: Extra seconds slept after the window clears
            clock: Returns the current time in seconds since the epoch
            sleep: Blocks the calling thread for the given seconds

        Raises:
            InvalidConfigurationError: If a limit or the margin is out of range
        """
        if isinstance(safety_margin, bool) or not isinstance(safety_margin, (int, float)) or safety_margin < 0:
            raise InvalidConfigurationError("safety_margin must be a number >= 0", field="safety_margin")

        self.lock = RLock()
        self.max_requests = DEFAULT_MAX_REQUESTS
        self.window_seconds = DEFAULT_WINDOW_SECONDS
        self.configure(max_requests, window_seconds)

        self.safety_margin = float(safety_margin)
        self.enabled = True
        self.observer: Optional[RateLimitObserver] = None
        self.requests: deque[float] = deque()

        self._clock = clock
        self._sleep = sleep

    def configure(self, max_requests: int, window_seconds: int) -> None:
        """Set the request budget.

        Both values are checked before either is stored. The existing call
        log is kept as is; it is re-evaluated on the next admission.

        Args:
            max_requests: Maximum number of calls admitted per window
            window_seconds: Length of the trailing window in seconds

        Raises:
            InvalidConfigurationError: If either value is not a positive integer
        """
        if not validate_positive_integer(max_requests):
            raise InvalidConfigurationError(
                f"max_requests must be a positive integer, got {max_requests!r}", field="max_requests"
            )
        if not validate_positive_integer(window_seconds):
            raise InvalidConfigurationError(
                f"window_seconds must be a positive integer, got {window_seconds!r}", field="window_seconds"
            )

        with self.lock:
            self.max_requests = max_requests
            self.window_seconds = window_seconds
        logger.debug(f"Rate limit set to {max_requests} requests per {window_seconds}s")

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        """Turn admission control off. Calls made while disabled are not logged."""
        self.enabled = False

    def set_observer(self, callback: Optional[RateLimitObserver]) -> None:
        """Register the callback fired when a call is about to be throttled.

        The callback receives ``(wait_seconds, current_count, max_requests)``.
        Passing ``None`` removes the current observer.

        Raises:
            InvalidArgumentError: If callback is not callable; the previous
                observer stays registered
        """
        if callback is not None and not callable(callback):
            raise InvalidArgumentError("Callback must be callable", argument="callback")
        self.observer = callback

    def stats(self) -> dict[str, Any]:
        """Return the current usage of the window.

        Reading stats evicts expired entries from the call log, so this is not
        a pure query. It shares the admission lock, so while another thread
        sleeps in ``acquire`` this call waits up to ``window_seconds`` plus
        the safety margin; ``reset`` behaves the same way.

        Returns:
            Dict with requests_made, max_requests, window_seconds,
            requests_remaining and enabled
        """
        with self.lock:
            self._evict(self._clock())
            requests_made = len(self.requests)

            return {
                "requests_made": requests_made,
                "max_requests": self.max_requests,
                "window_seconds": self.window_seconds,
                "requests_remaining": max(0, self.max_requests - requests_made),
                "enabled": self.enabled,
            }

    def reset(self) -> None:
        """Clear the call log."""
        with self.lock:
            self.requests.clear()
        logger.debug("Rate limit call log cleared")

    def acquire(self) -> float:
        """Wait until a call may be made, then record it.

        Returns immediately without touching the call log when disabled.
        Never raises for throttling; the worst case is a blocked thread.

        Returns:
            Seconds spent sleeping (0.0 when admitted immediately)
        """
        if not self.enabled:
            return 0.0

        with self.lock:
            now = self._clock()
            self._evict(now)

            slept = 0.0
            # Loops more than once only when configure() lowered the budget below the log size
            while len(self.requests) >= self.max_requests:
                oldest = min(self.requests)
                wait_time = self.window_seconds - (now - oldest)
                if wait_time <= 0:
                    break

                current_count = len(self.requests)
                logger.warning(
                    f"Rate limit reached: {current_count}/{self.max_requests} requests "
                    f"in {self.window_seconds}s window. Waiting {wait_time:.1f}s"
                )
                self._notify(wait_time, current_count)

                self._sleep(wait_time + self.safety_margin)
                slept += wait_time + self.safety_margin
                now = self._clock()
                self._evict(now)

            self.requests.append(self._clock())
            return slept

    def _notify(self, wait_time: float, current_count: int) -> None:
        """Call the observer; a failing observer does not stop admission."""
        if self.observer is None:
            return

        try:
            self.observer(wait_time, current_count, self.max_requests)
        except Exception:
            logger.exception("Rate limit observer raised; continuing with admission")

    def _evict(self, now: float) -> None:
        """Drop timestamps at or before ``now - window_seconds``."""
        window_start = now - self.window_seconds
        if any(timestamp <= window_start for timestamp in self.requests):
            self.requests = deque(timestamp for timestamp in self.requests if timestamp > window_start)
