"""
Proof Consumer
==============
Checks proof tokens presented with a form submission.
"""

import time
from typing import Callable, Optional
import structlog

from ..config import OTPConfig
from ..phone import mask_phone_key, normalize_phone_key
from ..store import ExpiringStore, OtpStore
from .codes import verify_token

logger = structlog.get_logger(__name__)


class ProofConsumer:
    """
    Validates proof tokens issued by OtpEngine.submit_code.

    ``is_verified`` is read-only, so a form that fails validation elsewhere
    can be re-submitted with the same token while it lives. Call ``consume``
    once the downstream action has committed to retire the token.
    """

    def __init__(
        self,
        store: ExpiringStore,
        config: Optional[OTPConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or OTPConfig()
        self.otp_store = OtpStore(store, clock=clock)

    def normalize(self, phone: str) -> str:
        return normalize_phone_key(phone, self.config.phone_length, self.config.country_prefix)

    async def is_verified(self, phone: str, token: Optional[str]) -> bool:
        """
        Check a presented token against the stored proof for ``phone``.

        Returns:
            True only if a live proof exists and matches exactly
        """
        phone_key = self.normalize(phone)
        if not phone_key or not token:
            return False

        record = await self.otp_store.get_proof(phone_key)
        if record is None:
            return False

        return verify_token(token, record.token_hash)

    async def consume(self, phone: str, token: Optional[str]) -> bool:
        """Validate the token and delete it on success."""
        if not await self.is_verified(phone, token):
            return False

        phone_key = self.normalize(phone)
        await self.otp_store.delete_proof(phone_key)
        logger.info("Proof token consumed", phone=mask_phone_key(phone_key))
        return True
