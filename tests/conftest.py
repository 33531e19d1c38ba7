"""Shared fixtures for meli-sdk tests."""

from unittest.mock import Mock

import pytest

from meli_sdk.utils.rate_limiter import SlidingWindowRateLimiter


class FakeClock:
    """Manually driven clock; sleeping advances it instead of blocking."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def time(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return SlidingWindowRateLimiter(max_requests=3, window_seconds=10, clock=clock.time, sleep=clock.sleep)


@pytest.fixture
def transport():
    """Stand-in transport returning a fixed 200 response."""
    mock = Mock()
    mock.send.return_value = {"http_code": 200, "body": {"id": "MLB123"}}
    return mock
