"""Tests for the sliding window rate limiter."""

from __future__ import annotations

import threading

import pytest

from placekit.services.rate_limiter import SlidingWindowRateLimiter
from placekit.shared.errors import ApplicationError


@pytest.fixture
def limiter(fake_clock):
    return SlidingWindowRateLimiter(2, 10, clock=fake_clock, sleep=fake_clock.sleep)


class TestSlidingWindowRateLimiter:
    """Admission control with an injected clock."""

    def test_admits_up_to_limit_without_waiting(self, limiter, fake_clock):
        assert limiter.admit() == 0.0
        assert limiter.admit() == 0.0
        assert fake_clock.sleeps == []
        assert limiter.in_window() == 2

    def test_blocks_until_oldest_leaves_window(self, limiter, fake_clock):
        """The third call waits until the first admission is a full period old."""
        limiter.admit()
        fake_clock.advance(1)
        limiter.admit()

        waited = limiter.admit()

        assert waited == pytest.approx(9)
        assert fake_clock.sleeps == [pytest.approx(9)]
        assert limiter.in_window() == 2

    def test_window_slides(self, limiter, fake_clock):
        limiter.admit()
        limiter.admit()
        fake_clock.advance(10)

        assert limiter.in_window() == 0
        assert limiter.admit() == 0.0

    def test_frozen_clock_still_admits(self, fake_clock):
        """A sleep that does not advance time must not block forever."""
        limiter = SlidingWindowRateLimiter(1, 5, clock=fake_clock, sleep=lambda s: None)
        limiter.admit()

        assert limiter.admit() == pytest.approx(5)
        assert limiter.in_window() == 1

    def test_reset(self, limiter, fake_clock):
        limiter.admit()
        limiter.admit()
        limiter.reset()

        assert limiter.admit() == 0.0
        assert fake_clock.sleeps == []

    def test_thread_safety(self):
        """Concurrent callers never exceed the limit."""
        limiter = SlidingWindowRateLimiter(50, 60)
        threads = [threading.Thread(target=limiter.admit) for _ in range(50)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert limiter.in_window() == 50

    @pytest.mark.parametrize(("limit", "period"), [(0, 1), (-1, 1), (1, 0), (1, -2.5)])
    def test_invalid_arguments(self, limit, period):
        with pytest.raises(ApplicationError):
            SlidingWindowRateLimiter(limit, period)
