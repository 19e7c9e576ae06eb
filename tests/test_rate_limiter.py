from __future__ import annotations

import pytest

from realty_api.core.errors import RateLimitedError
from realty_api.core.rate_limiter import RateLimiter


def test_hits_beyond_limit_are_refused_until_window_slides():
    limiter = RateLimiter()
    limiter.check("login:1.2.3.4", 2, 60, now=100.0)
    limiter.check("login:1.2.3.4", 2, 60, now=110.0)
    with pytest.raises(RateLimitedError):
        limiter.check("login:1.2.3.4", 2, 60, now=150.0)
    limiter.check("login:1.2.3.4", 2, 60, now=161.0)


def test_keys_are_independent_and_zero_disables():
    limiter = RateLimiter()
    limiter.check("a", 1, 60, now=0.0)
    limiter.check("b", 1, 60, now=0.0)
    for _ in range(5):
        limiter.check("a", 0, 60, now=1.0)


def test_reset_forgets_history():
    limiter = RateLimiter()
    limiter.check("a", 1, 60, now=0.0)
    limiter.reset()
    limiter.check("a", 1, 60, now=1.0)
