"""Rate-limited gateway wrapping a transport with admission control."""

import logging
from typing import Any, Optional

from ..utils.rate_limiter import RateLimitObserver, SlidingWindowRateLimiter
from .base import RequestSender

logger = logging.getLogger(__name__)


class RateLimitedGateway:
    """Throttles calls before handing them to a wrapped sender.

    The gateway only decides *when* a request fires. The wrapped sender's
    response, errors included, is returned untouched: no retry, no backoff.

    Admission blocks the calling thread when the window is full. There is no
    timeout on that wait; callers needing one should run the request on a
    worker they can abandon.
    """

    def __init__(self, transport: RequestSender, rate_limiter: Optional[SlidingWindowRateLimiter] = None) -> None:
        """Initialize the gateway.

        Args:
            transport: Sender that performs the actual request
            rate_limiter: Limiter to consult; a default 50 per 60s one when omitted
        """
        self.transport = transport
        self.rate_limiter = rate_limiter or SlidingWindowRateLimiter()

    def configure(self, max_requests: int, window_seconds: int) -> None:
        self.rate_limiter.configure(max_requests, window_seconds)

    def enable(self) -> None:
        self.rate_limiter.enable()

    def disable(self) -> None:
        self.rate_limiter.disable()

    def set_observer(self, callback: Optional[RateLimitObserver]) -> None:
        self.rate_limiter.set_observer(callback)

    def stats(self) -> dict[str, Any]:
        """Current window usage. Evicts expired entries as a side effect."""
        return self.rate_limiter.stats()

    def reset(self) -> None:
        self.rate_limiter.reset()

    def admit_and_execute(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        body: Any = None,
        assoc: bool = False,
    ) -> dict[str, Any]:
        """Wait for admission, then delegate the request.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Absolute URL
            headers: Extra request headers
            body: Request body
            assoc: Decode JSON objects to dicts instead of attribute objects

        Returns:
            The wrapped sender's response, unmodified
        """
        waited = self.rate_limiter.acquire()
        if waited:
            logger.info(f"Admitted {method} {url} after waiting {waited:.1f}s")

        return self.transport.send(method, url, headers=headers, body=body, assoc=assoc)

    send = admit_and_execute

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()
