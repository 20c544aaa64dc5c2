"""Request safeguards."""

from .rate_limiter import RateLimiter

__all__ = ["RateLimiter"]
