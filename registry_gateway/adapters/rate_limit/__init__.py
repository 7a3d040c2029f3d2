"""Rate limiting adapters.

This package keeps admission control behind a small abstraction so the
document service only depends on ``AbstractRateLimiter``.
"""

from registry_gateway.adapters.rate_limit.base import (
    AbstractRateLimiter,
    RateLimitStats,
    WindowConfig,
)
from registry_gateway.adapters.rate_limit.eviction import EvictionScheduler
from registry_gateway.adapters.rate_limit.sliding_window import SlidingWindowRateLimiter
from registry_gateway.adapters.rate_limit.window_tracker import WindowTracker

__all__ = [
    "AbstractRateLimiter",
    "EvictionScheduler",
    "RateLimitStats",
    "SlidingWindowRateLimiter",
    "WindowConfig",
    "WindowTracker",
]
