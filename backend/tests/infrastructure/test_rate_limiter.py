"""Fixed window limiter tests with a controllable clock."""

import pytest

from jsonspark.infrastructure.rate_limiter import FixedWindowRateLimiter


class _Clock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_admits_up_to_limit_then_blocks():
    limiter = FixedWindowRateLimiter(2, 60, clock=_Clock())
    assert limiter.hit("a").allowed
    assert limiter.hit("a").allowed
    blocked = limiter.hit("a")
    assert not blocked.allowed
    assert blocked.remaining == 0


def test_clients_counted_separately():
    limiter = FixedWindowRateLimiter(1, 60, clock=_Clock())
    assert limiter.hit("a").allowed
    assert limiter.hit("b").allowed
    assert not limiter.hit("a").allowed


def test_new_window_resets_counts():
    clock = _Clock(now=1000.0)
    limiter = FixedWindowRateLimiter(1, 60, clock=clock)
    limiter.hit("a")
    assert not limiter.hit("a").allowed
    clock.now = 1080.0
    assert limiter.hit("a").allowed


def test_reset_after_counts_to_window_end():
    # Window [960, 1020) contains 1000
    limiter = FixedWindowRateLimiter(5, 60, clock=_Clock(now=1000.0))
    decision = limiter.hit("a")
    assert decision.reset_after == 20
    assert decision.headers() == {
        "X-RateLimit-Limit": "5",
        "X-RateLimit-Remaining": "4",
        "X-RateLimit-Reset": "20",
    }


@pytest.mark.parametrize("max_requests, window", [(0, 60), (5, 0)])
def test_rejects_non_positive_configuration(max_requests, window):
    with pytest.raises(ValueError):
        FixedWindowRateLimiter(max_requests, window)
