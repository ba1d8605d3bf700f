"""API middleware — CORS, rate limiting, catch-all errors."""

from qrmint.api.middleware.cors import AllowListCORSMiddleware, setup_cors
from qrmint.api.middleware.errors import UnhandledErrorMiddleware
from qrmint.api.middleware.rate_limit import RateLimitMiddleware, SlidingWindowLimiter

__all__ = [
    "AllowListCORSMiddleware",
    "RateLimitMiddleware",
    "SlidingWindowLimiter",
    "UnhandledErrorMiddleware",
    "setup_cors",
]
