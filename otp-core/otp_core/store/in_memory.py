"""
In-Memory Expiring Store
========================
Process-local store for development and testing.
"""

import time
from typing import Callable, Dict, Optional, Tuple

from .base import ExpiringStore


class InMemoryExpiringStore(ExpiringStore):
    """
    Simple in-memory expiring store.

    For development and testing only.
    Use RedisExpiringStore in production.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        """
        Args:
            clock: Returns the current Unix time; injectable for tests
        """
        self.clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}

    async def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if self.clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._cleanup()
        self._entries[key] = (value, self.clock() + ttl_seconds)

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def __len__(self) -> int:
        self._cleanup()
        return len(self._entries)

    def _cleanup(self) -> None:
        """Remove expired entries."""
        now = self.clock()
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
