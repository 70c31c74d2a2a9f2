"""
OTP Storage
===========
Expiring stores and the typed OTP record store built on them.
"""

from .base import ExpiringStore
from .in_memory import InMemoryExpiringStore
from .redis_store import RedisExpiringStore
from .models import OtpRecord, ProofRecord, RateCounter
from .otp_store import OtpStore, ttl_until

__all__ = [
    "ExpiringStore",
    "InMemoryExpiringStore",
    "RedisExpiringStore",
    "OtpRecord",
    "ProofRecord",
    "RateCounter",
    "OtpStore",
    "ttl_until",
]
