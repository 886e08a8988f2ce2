"""Admission control applied before any tool call is processed."""

from sealion_mcp.app.middleware.rate_limit import RateLimitResult, SlidingWindowRateLimiter

__all__ = ["RateLimitResult", "SlidingWindowRateLimiter"]
