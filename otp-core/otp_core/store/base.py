"""
Expiring Store
==============
Minimal async key-value interface with per-key TTL.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ExpiringStore(ABC):
    """
    Key-value store whose entries disappear after a TTL.

    Each call must be atomic on its own; no multi-key transactions are needed.
    Implementations raise StoreUnavailableError when the backend cannot be reached.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the value, or None when missing or expired."""

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store or replace a value with a TTL in seconds."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""
