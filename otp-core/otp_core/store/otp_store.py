"""
OTP Store
=========
Typed access to codes and proof tokens kept in an expiring store.
"""

import math
import time
from typing import Callable, Optional
import structlog

from ..phone import mask_phone_key
from .base import ExpiringStore
from .models import OtpRecord, ProofRecord

logger = structlog.get_logger(__name__)


def ttl_until(expires_at: float, now: float) -> int:
    """Whole seconds left before ``expires_at``, never below 1."""
    return max(1, math.ceil(expires_at - now))


class OtpStore:
    """
    One active OtpRecord and one active ProofRecord per phone key.

    Expiry is checked again on read against the injected clock, so a
    backend that evicts late never resurrects an expired record.
    """

    def __init__(
        self,
        store: ExpiringStore,
        clock: Callable[[], float] = time.time,
        prefix: str = "otp",
    ):
        self.store = store
        self.clock = clock
        self.prefix = prefix

    def code_key(self, phone_key: str) -> str:
        return f"{self.prefix}:code:{phone_key}"

    def proof_key(self, phone_key: str) -> str:
        return f"{self.prefix}:verified:{phone_key}"

    async def save_code(self, phone_key: str, record: OtpRecord) -> None:
        """Store a code, replacing any pending one."""
        await self.store.set(
            self.code_key(phone_key),
            record.to_json(),
            ttl_until(record.expires_at, self.clock()),
        )

    async def get_code(self, phone_key: str) -> Optional[OtpRecord]:
        raw = await self.store.get(self.code_key(phone_key))
        if raw is None:
            return None

        try:
            record = OtpRecord.from_json(raw)
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding malformed OTP record", phone=mask_phone_key(phone_key))
            return None

        if record.is_expired(self.clock()):
            return None
        return record

    async def delete_code(self, phone_key: str) -> None:
        await self.store.delete(self.code_key(phone_key))

    async def save_proof(self, phone_key: str, record: ProofRecord) -> None:
        await self.store.set(
            self.proof_key(phone_key),
            record.to_json(),
            ttl_until(record.expires_at, self.clock()),
        )

    async def get_proof(self, phone_key: str) -> Optional[ProofRecord]:
        raw = await self.store.get(self.proof_key(phone_key))
        if raw is None:
            return None

        try:
            record = ProofRecord.from_json(raw)
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding malformed proof record", phone=mask_phone_key(phone_key))
            return None

        if record.is_expired(self.clock()) or record.phone_key != phone_key:
            return None
        return record

    async def delete_proof(self, phone_key: str) -> None:
        await self.store.delete(self.proof_key(phone_key))
