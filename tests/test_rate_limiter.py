"""Unit tests for the sliding-window rate limiter."""

from unittest.mock import Mock

import pytest

from meli_sdk.exceptions import InvalidArgumentError, InvalidConfigurationError
from meli_sdk.utils.rate_limiter import SlidingWindowRateLimiter


class TestConfiguration:
    """Test rate limit configuration and validation."""

    def test_defaults(self):
        """Initial stats show the 50 per 60s default and an empty log."""
        stats = SlidingWindowRateLimiter().stats()

        assert stats == {
            "requests_made": 0,
            "max_requests": 50,
            "window_seconds": 60,
            "requests_remaining": 50,
            "enabled": True,
        }

    def test_configure_is_reflected_in_stats(self, limiter):
        limiter.configure(50, 60)

        stats = limiter.stats()
        assert stats["max_requests"] == 50
        assert stats["window_seconds"] == 60

    @pytest.mark.parametrize(
        "max_requests, window_seconds, field",
        [
            (0, 60, "max_requests"),
            (50, 0, "window_seconds"),
            (-5, 60, "max_requests"),
            (50, -1, "window_seconds"),
            (2.5, 60, "max_requests"),
            (True, 60, "max_requests"),
            (50, "60", "window_seconds"),
        ],
    )
    def test_configure_rejects_invalid_values(self, limiter, max_requests, window_seconds, field):
        """Invalid values raise and leave the previous budget untouched."""
        with pytest.raises(InvalidConfigurationError) as exc_info:
            limiter.configure(max_requests, window_seconds)

        assert exc_info.value.field == field
        assert field in str(exc_info.value)
        assert limiter.max_requests == 3
        assert limiter.window_seconds == 10

    def test_constructor_rejects_invalid_values(self):
        with pytest.raises(InvalidConfigurationError):
            SlidingWindowRateLimiter(max_requests=0)

        with pytest.raises(InvalidConfigurationError):
            SlidingWindowRateLimiter(safety_margin=-1)

    def test_configure_keeps_existing_log(self, limiter):
        for _ in range(3):
            limiter.acquire()

        limiter.configure(2, 10)

        stats = limiter.stats()
        assert stats["requests_made"] == 3
        assert stats["requests_remaining"] == 0


class TestObserver:
    """Test observer registration."""

    def test_non_callable_is_rejected(self, limiter):
        """A non-callable raises and keeps the previously registered observer."""
        observer = Mock()
        limiter.set_observer(observer)

        with pytest.raises(InvalidArgumentError, match="Callback must be callable"):
            limiter.set_observer("not-a-function")

        assert limiter.observer is observer

    def test_none_clears_observer(self, limiter):
        limiter.set_observer(Mock())
        limiter.set_observer(None)

        assert limiter.observer is None


class TestAdmission:
    """Test the admission algorithm."""

    def test_admits_under_budget_without_sleeping(self, limiter, clock):
        for _ in range(3):
            assert limiter.acquire() == 0.0

        assert clock.sleeps == []
        assert limiter.stats()["requests_made"] == 3

    def test_same_second_calls_are_counted_individually(self, limiter, clock):
        limiter.configure(5, 10)
        for _ in range(4):
            limiter.acquire()

        assert list(limiter.requests) == [clock.now] * 4

    def test_blocks_when_budget_exhausted(self, limiter, clock):
        """configure(3, 10), three calls at t=0, fourth waits 10s plus margin."""
        start = clock.now
        observer = Mock()
        limiter.set_observer(observer)

        for _ in range(3):
            limiter.acquire()

        stats = limiter.stats()
        assert stats["requests_made"] == 3
        assert stats["requests_remaining"] == 0

        slept = limiter.acquire()

        observer.assert_called_once_with(10, 3, 3)
        assert slept == 11.0
        assert clock.sleeps == [11.0]
        assert clock.now >= start + 11

        # The three old entries are evicted, only the new call remains
        stats = limiter.stats()
        assert stats["requests_made"] == 1
        assert stats["requests_remaining"] == 2

    def test_wait_shrinks_as_window_ages(self, limiter, clock):
        for _ in range(3):
            limiter.acquire()
        clock.advance(4)

        limiter.acquire()

        assert clock.sleeps == [7.0]

    def test_entries_older_than_window_are_evicted(self, limiter, clock):
        for _ in range(3):
            limiter.acquire()
        clock.advance(10)

        assert limiter.acquire() == 0.0
        assert limiter.stats()["requests_made"] == 1

    def test_entry_exactly_at_window_edge_is_evicted(self, limiter, clock):
        limiter.acquire()
        clock.advance(10)

        assert limiter.stats()["requests_made"] == 0

    def test_zero_margin(self, clock):
        limiter = SlidingWindowRateLimiter(2, 5, safety_margin=0, clock=clock.time, sleep=clock.sleep)
        limiter.acquire()
        clock.advance(1)
        limiter.acquire()

        limiter.acquire()

        assert clock.sleeps == [4.0]
        assert limiter.stats()["requests_made"] == 2

    def test_window_invariant_holds_over_many_calls(self, limiter, clock):
        """The log never holds more than max_requests entries inside the window."""
        for step in range(40):
            limiter.acquire()
            clock.advance(0.7 if step % 3 else 2.3)

            in_window = [t for t in limiter.requests if t > clock.now - limiter.window_seconds]
            assert len(in_window) <= limiter.max_requests
            assert limiter.stats()["requests_made"] <= limiter.max_requests

    def test_lowered_budget_waits_until_log_fits(self, limiter, clock):
        """After configure() shrinks the budget, admission waits out every excess entry."""
        observer = Mock()
        limiter.set_observer(observer)
        start = clock.now
        limiter.acquire()
        clock.advance(3)
        limiter.acquire()
        clock.advance(3)
        limiter.acquire()

        limiter.configure(1, 10)
        limiter.acquire()

        assert clock.sleeps == [5.0, 3.0, 3.0]
        assert [c[0][1] for c in observer.call_args_list] == [3, 2, 1]
        assert list(limiter.requests) == [start + 17]
        assert limiter.stats()["requests_made"] <= 1

    def test_observer_exception_does_not_block_admission(self, limiter, clock, caplog):
        limiter.set_observer(Mock(side_effect=RuntimeError("telemetry down")))
        for _ in range(3):
            limiter.acquire()

        limiter.acquire()

        assert clock.sleeps == [11.0]
        assert limiter.stats()["requests_made"] == 1
        assert "observer raised" in caplog.text

    def test_observer_not_called_without_blocking(self, limiter):
        observer = Mock()
        limiter.set_observer(observer)

        for _ in range(3):
            limiter.acquire()

        observer.assert_not_called()


class TestEnablement:
    """Test enabling, disabling and resetting."""

    def test_disabled_never_blocks_or_logs(self, limiter, clock):
        for _ in range(3):
            limiter.acquire()
        before = list(limiter.requests)

        limiter.disable()
        for _ in range(10):
            assert limiter.acquire() == 0.0

        assert clock.sleeps == []
        assert list(limiter.requests) == before

        stats = limiter.stats()
        assert stats["enabled"] is False
        assert stats["requests_made"] == 3

    def test_reenable_resumes_enforcement(self, limiter, clock):
        limiter.disable()
        limiter.enable()
        for _ in range(4):
            limiter.acquire()

        assert limiter.stats()["enabled"] is True
        assert len(clock.sleeps) == 1

    def test_reset_clears_history(self, limiter):
        for _ in range(3):
            limiter.acquire()

        limiter.reset()

        stats = limiter.stats()
        assert stats["requests_made"] == 0
        assert stats["requests_remaining"] == stats["max_requests"]
