"""
OTP Engine
==========
Issues codes over SMS, verifies them and hands out proof tokens.

Per phone key the lifecycle is NONE -> CODE_PENDING -> VERIFIED -> NONE,
with CODE_PENDING falling back to NONE when the code expires.
"""

import time
from typing import Callable, Optional
import structlog

from ..config import OTPConfig
from ..errors import OtpErrorCode, user_message
from ..gateway import BaseSmsGateway
from ..metrics import record_code_request, record_verification
from ..phone import mask_phone_key, normalize_phone_key
from ..rate_limit import UNKNOWN_ORIGIN, OtpRateLimiter
from ..store import ExpiringStore, OtpRecord, OtpStore, ProofRecord
from .codes import (
    generate_code,
    generate_proof_token,
    generate_salt,
    hash_code,
    hash_token,
    is_code_format,
    verify_code,
)
from .models import OtpState, RequestCodeResult, SubmitCodeResult

logger = structlog.get_logger(__name__)


class OtpEngine:
    """
    Orchestrates normalization, rate limiting, storage and delivery.

    Expected failures come back as tagged results; only an unreachable
    code store raises (StoreUnavailableError).
    """

    def __init__(
        self,
        store: ExpiringStore,
        gateway: BaseSmsGateway,
        config: Optional[OTPConfig] = None,
        clock: Callable[[], float] = time.time,
        rate_limiter: Optional[OtpRateLimiter] = None,
    ):
        """
        Args:
            store: Expiring store shared by codes, proofs and counters
            gateway: SMS gateway used for delivery
            config: OTP settings
            clock: Returns the current Unix time; injectable for tests
            rate_limiter: Override the default limiter built on ``store``
        """
        self.config = config or OTPConfig()
        self.clock = clock
        self.gateway = gateway
        self.otp_store = OtpStore(store, clock=clock)
        self.rate_limiter = rate_limiter or OtpRateLimiter(store, self.config, clock=clock)

    def normalize(self, phone: str) -> str:
        return normalize_phone_key(phone, self.config.phone_length, self.config.country_prefix)

    def _request_failed(self, error: OtpErrorCode) -> RequestCodeResult:
        record_code_request(error.value)
        return RequestCodeResult(
            success=False,
            error=error,
            error_message=user_message(error, self.config),
        )

    def _submit_failed(self, error: OtpErrorCode) -> SubmitCodeResult:
        record_verification(error.value)
        return SubmitCodeResult(
            success=False,
            error=error,
            error_message=user_message(error, self.config),
        )

    async def request_code(self, phone: str, origin: str = UNKNOWN_ORIGIN) -> RequestCodeResult:
        """
        Generate a code for ``phone`` and send it by SMS.

        A pending code for the same phone is replaced; the send limiter is
        the only throttle.

        Args:
            phone: Raw phone number
            origin: Client origin used in the rate limit key

        Returns:
            RequestCodeResult with the code TTL on success
        """
        phone_key = self.normalize(phone)
        if not phone_key:
            return self._request_failed(OtpErrorCode.INVALID_PHONE)

        if not await self.rate_limiter.check_send(phone_key, origin):
            logger.warning("OTP send rate limited", phone=mask_phone_key(phone_key))
            return self._request_failed(OtpErrorCode.RATE_LIMITED)

        code = generate_code(self.config.code_length)
        salt = generate_salt()
        now = self.clock()
        await self.otp_store.save_code(
            phone_key,
            OtpRecord(
                code_hash=hash_code(code, salt),
                salt=salt,
                created_at=now,
                expires_at=now + self.config.expiry_seconds,
            ),
        )

        sent = await self.gateway.send_code(phone_key, code, self.config.message_template)

        if not sent.success:
            error = OtpErrorCode(sent.reason.value)
            if error.is_operator_error:
                logger.error(
                    "OTP delivery misconfigured",
                    provider=self.gateway.name,
                    reason=error.value,
                    detail=sent.detail,
                )
            else:
                logger.warning(
                    "OTP delivery failed",
                    provider=self.gateway.name,
                    phone=mask_phone_key(phone_key),
                    reason=error.value,
                )
            return self._request_failed(error)

        await self.rate_limiter.increment_send(phone_key, origin)
        record_code_request("sent")
        logger.info(
            "OTP sent",
            phone=mask_phone_key(phone_key),
            expires_in=self.config.expiry_seconds,
        )
        return RequestCodeResult(success=True, expires_in_seconds=self.config.expiry_seconds)

    async def submit_code(
        self,
        phone: str,
        code: str,
        origin: str = UNKNOWN_ORIGIN,
    ) -> SubmitCodeResult:
        """
        Verify a code and issue a proof token.

        Wrong and expired codes count against the verify limit; malformed
        input and lockouts do not.

        Args:
            phone: Raw phone number
            code: User-entered code
            origin: Client origin used in the rate limit key

        Returns:
            SubmitCodeResult carrying the proof token on success
        """
        phone_key = self.normalize(phone)
        code = code.strip() if isinstance(code, str) else ""

        if not phone_key or not is_code_format(code, self.config.code_length):
            return self._submit_failed(OtpErrorCode.INVALID_FORMAT)

        if not await self.rate_limiter.check_verify(phone_key, origin):
            logger.warning("OTP verify locked out", phone=mask_phone_key(phone_key))
            return self._submit_failed(OtpErrorCode.VERIFY_RATE_LIMITED)

        record = await self.otp_store.get_code(phone_key)
        if record is None:
            await self.rate_limiter.increment_verify(phone_key, origin)
            return self._submit_failed(OtpErrorCode.CODE_EXPIRED)

        if not verify_code(code, record.salt, record.code_hash):
            await self.rate_limiter.increment_verify(phone_key, origin)
            logger.warning("Invalid OTP attempt", phone=mask_phone_key(phone_key))
            return self._submit_failed(OtpErrorCode.INVALID_CODE)

        await self.otp_store.delete_code(phone_key)
        await self.rate_limiter.clear_verify(phone_key, origin)

        token = generate_proof_token(self.config.proof_token_bytes)
        now = self.clock()
        await self.otp_store.save_proof(
            phone_key,
            ProofRecord(
                token_hash=hash_token(token),
                phone_key=phone_key,
                created_at=now,
                expires_at=now + self.config.proof_ttl_seconds,
            ),
        )

        record_verification("verified")
        logger.info("OTP verified", phone=mask_phone_key(phone_key))
        return SubmitCodeResult(success=True, proof_token=token, verified_phone=phone_key)

    async def state_of(self, phone: str) -> OtpState:
        """
        Report where ``phone`` is in the lifecycle.

        A pending code wins over an older proof, so re-requesting after
        verification reads as CODE_PENDING.
        """
        phone_key = self.normalize(phone)
        if not phone_key:
            return OtpState.NONE
        if await self.otp_store.get_code(phone_key) is not None:
            return OtpState.CODE_PENDING
        if await self.otp_store.get_proof(phone_key) is not None:
            return OtpState.VERIFIED
        return OtpState.NONE
