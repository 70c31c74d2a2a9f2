"""
Rate Limiting Module
====================
Send and verify attempt limits keyed by phone and client origin.
"""

from .models import CounterKind, RateLimitInfo, RateLimitResult
from .origin import UNKNOWN_ORIGIN, hash_rate_key, resolve_client_origin
from .limiter import OtpRateLimiter

__all__ = [
    # Models
    "CounterKind",
    "RateLimitInfo",
    "RateLimitResult",
    # Origin
    "UNKNOWN_ORIGIN",
    "hash_rate_key",
    "resolve_client_origin",
    # Limiter
    "OtpRateLimiter",
]
