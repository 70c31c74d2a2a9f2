"""
Rate Limit Models
=================
Decisions returned by the send and verify limiters.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CounterKind(str, Enum):
    """The two independent counters kept per phone."""
    SEND = "send"
    VERIFY = "verify"


class RateLimitResult(str, Enum):
    ALLOWED = "allowed"
    BLOCKED = "blocked"
    DEGRADED = "degraded"  # Store down; decided by fail-open/closed policy


@dataclass
class RateLimitInfo:
    """
    Outcome of checking one counter.

    ``reset_at`` is when the current window ends (Unix seconds). For a
    counter with no live window it is when a window started now would end.
    """
    counter: CounterKind
    allowed: bool
    remaining: int
    limit: int
    reset_at: int
    retry_after: Optional[int] = None
    degraded: bool = False

    @property
    def result(self) -> RateLimitResult:
        if self.degraded:
            return RateLimitResult.DEGRADED
        if self.allowed:
            return RateLimitResult.ALLOWED
        return RateLimitResult.BLOCKED
