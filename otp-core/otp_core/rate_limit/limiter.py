"""
OTP Rate Limiter
================
Fixed-window send and verify counters per (phone, origin).
"""

import time
from typing import Callable, Optional, Tuple
import structlog

from ..config import OTPConfig
from ..errors import StoreUnavailableError
from ..metrics import record_store_error
from ..phone import mask_phone_key
from ..store import ExpiringStore, RateCounter, ttl_until
from .models import CounterKind, RateLimitInfo
from .origin import UNKNOWN_ORIGIN, hash_rate_key

logger = structlog.get_logger(__name__)


class OtpRateLimiter:
    """
    Send and verify attempt limiter.

    - Send: ``max_send`` successful sends per ``send_window_seconds``
    - Verify: ``max_verify`` failed guesses per ``verify_window_seconds``

    A window starts with the first increment and is not extended by later
    ones. When the store is unavailable, checks follow
    ``config.fail_open_on_store_error``: True allows, False denies.
    """

    def __init__(
        self,
        store: ExpiringStore,
        config: Optional[OTPConfig] = None,
        clock: Callable[[], float] = time.time,
        prefix: str = "otp_rate",
    ):
        self.store = store
        self.config = config or OTPConfig()
        self.clock = clock
        self.prefix = prefix

    def _policy(self, counter: CounterKind) -> Tuple[int, int]:
        if counter == CounterKind.SEND:
            return self.config.max_send, self.config.send_window_seconds
        return self.config.max_verify, self.config.verify_window_seconds

    def counter_key(self, counter: CounterKind, phone_key: str, origin: str) -> str:
        if counter == CounterKind.VERIFY and not self.config.verify_key_includes_origin:
            origin = ""
        return f"{self.prefix}:{counter.value}:{hash_rate_key(phone_key, origin)}"

    async def _read(self, key: str) -> Optional[RateCounter]:
        raw = await self.store.get(key)
        if raw is None:
            return None
        try:
            current = RateCounter.from_json(raw)
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding malformed rate counter", key=key)
            return None
        if current.is_expired(self.clock()):
            return None
        return current

    async def inspect(
        self,
        counter: CounterKind,
        phone_key: str,
        origin: str = UNKNOWN_ORIGIN,
    ) -> RateLimitInfo:
        """
        Check a counter without changing it.

        Returns:
            RateLimitInfo with decision and quota
        """
        limit, window = self._policy(counter)
        now = self.clock()

        try:
            current = await self._read(self.counter_key(counter, phone_key, origin))
        except StoreUnavailableError as e:
            fail_open = self.config.fail_open_on_store_error
            record_store_error(counter.value, fail_open)
            logger.error(
                "Rate limit check failed",
                counter=counter.value,
                error=str(e),
                policy="fail_open" if fail_open else "fail_closed",
            )
            return RateLimitInfo(
                counter=counter,
                allowed=fail_open,
                remaining=limit if fail_open else 0,
                limit=limit,
                reset_at=int(now) + window,
                retry_after=None if fail_open else window,
                degraded=True,
            )

        if current is None:
            return RateLimitInfo(
                counter=counter,
                allowed=True,
                remaining=limit,
                limit=limit,
                reset_at=int(now) + window,
            )

        reset_at = int(current.window_expires_at)
        if current.count >= limit:
            return RateLimitInfo(
                counter=counter,
                allowed=False,
                remaining=0,
                limit=limit,
                reset_at=reset_at,
                retry_after=ttl_until(current.window_expires_at, now),
            )

        return RateLimitInfo(
            counter=counter,
            allowed=True,
            remaining=limit - current.count,
            limit=limit,
            reset_at=reset_at,
        )

    async def increment(
        self,
        counter: CounterKind,
        phone_key: str,
        origin: str = UNKNOWN_ORIGIN,
    ) -> None:
        """Count one attempt, starting a new window if none is active."""
        _, window = self._policy(counter)
        key = self.counter_key(counter, phone_key, origin)

        try:
            current = await self._read(key)
            now = self.clock()
            if current is None:
                current = RateCounter(count=1, window_expires_at=now + window)
            else:
                current.count += 1
            await self.store.set(key, current.to_json(), ttl_until(current.window_expires_at, now))
        except StoreUnavailableError as e:
            record_store_error(counter.value, self.config.fail_open_on_store_error)
            logger.warning(
                "Rate limit increment dropped",
                counter=counter.value,
                phone=mask_phone_key(phone_key),
                error=str(e),
            )

    async def clear(self, counter: CounterKind, phone_key: str, origin: str = UNKNOWN_ORIGIN) -> None:
        try:
            await self.store.delete(self.counter_key(counter, phone_key, origin))
        except StoreUnavailableError as e:
            record_store_error(counter.value, self.config.fail_open_on_store_error)
            logger.warning(
                "Rate limit reset dropped",
                counter=counter.value,
                phone=mask_phone_key(phone_key),
                error=str(e),
            )

    async def check_send(self, phone_key: str, origin: str = UNKNOWN_ORIGIN) -> bool:
        return (await self.inspect(CounterKind.SEND, phone_key, origin)).allowed

    async def increment_send(self, phone_key: str, origin: str = UNKNOWN_ORIGIN) -> None:
        await self.increment(CounterKind.SEND, phone_key, origin)

    async def check_verify(self, phone_key: str, origin: str = UNKNOWN_ORIGIN) -> bool:
        return (await self.inspect(CounterKind.VERIFY, phone_key, origin)).allowed

    async def increment_verify(self, phone_key: str, origin: str = UNKNOWN_ORIGIN) -> None:
        await self.increment(CounterKind.VERIFY, phone_key, origin)

    async def clear_verify(self, phone_key: str, origin: str = UNKNOWN_ORIGIN) -> None:
        await self.clear(CounterKind.VERIFY, phone_key, origin)
