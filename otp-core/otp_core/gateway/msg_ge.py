"""
msg.ge SMS Gateway
==================
Adapter for the bi.msg.ge HTTP API.

The API answers either with JSON (``{"code": "0000", "message_id": "..."}``)
or, depending on account settings, with plain text such as ``0000-123456``.
Replies are parsed into a ``ProviderReply`` before any decision is made.
"""

import json
import re
import time
from dataclasses import dataclass
from typing import Dict, Optional, Union

import httpx
import structlog

from ..config import GatewayConfig
from ..metrics import record_gateway_send
from ..phone import DEFAULT_PHONE_LENGTH, mask_phone_key, to_international
from .base import BaseSmsGateway, SendFailureReason, SendResult

logger = structlog.get_logger(__name__)

SUCCESS_CODE = "0000"

ERROR_CODES: Dict[str, SendFailureReason] = {
    "0001": SendFailureReason.BAD_CREDENTIALS,  # bad credentials or forbidden IP
    "0007": SendFailureReason.INVALID_DESTINATION,
    "0008": SendFailureReason.INSUFFICIENT_BALANCE,
}

_UNSAFE_CODE_CHARS = re.compile(r"[^a-zA-Z0-9]")
_UNSAFE_ID_CHARS = re.compile(r"[^a-zA-Z0-9_.:-]")
_LEADING_CODE = re.compile(r"^(\d{4})(?:\D|$)")


@dataclass(frozen=True)
class ProviderAccepted:
    message_id: str


@dataclass(frozen=True)
class ProviderRejected:
    code: str
    reason: SendFailureReason


@dataclass(frozen=True)
class ProviderUnrecognized:
    body: str


ProviderReply = Union[ProviderAccepted, ProviderRejected, ProviderUnrecognized]


def _clean_message_id(value) -> str:
    return _UNSAFE_ID_CHARS.sub("", str(value or "").strip())[:64]


def _reject(code: str) -> ProviderRejected:
    return ProviderRejected(
        code=code,
        reason=ERROR_CODES.get(code, SendFailureReason.UNEXPECTED_RESPONSE),
    )


def parse_provider_reply(body: str) -> ProviderReply:
    """
    Parse a raw msg.ge response body.

    Structured JSON with a string ``code`` is trusted first; anything else
    falls back to matching a leading status code in the raw text.
    """
    text = (body or "").strip()

    try:
        data = json.loads(text) if text else None
    except ValueError:
        data = None

    if isinstance(data, dict) and isinstance(data.get("code"), str):
        code = _UNSAFE_CODE_CHARS.sub("", data["code"])
        if code.startswith(SUCCESS_CODE):
            return ProviderAccepted(message_id=_clean_message_id(data.get("message_id")))
        return _reject(code)

    if text.startswith(SUCCESS_CODE):
        return ProviderAccepted(
            message_id=_clean_message_id(text.replace(f"{SUCCESS_CODE}-", "", 1))
        )

    match = _LEADING_CODE.match(text)
    if match and match.group(1) in ERROR_CODES:
        return _reject(match.group(1))

    return ProviderUnrecognized(body=text[:200])


def reply_to_result(reply: ProviderReply) -> SendResult:
    """Map a parsed reply to a SendResult. Only ProviderAccepted is a success."""
    if isinstance(reply, ProviderAccepted):
        return SendResult.ok(reply.message_id)
    if isinstance(reply, ProviderRejected):
        return SendResult.failed(reply.reason, detail=f"provider code {reply.code}")
    return SendResult.failed(SendFailureReason.UNEXPECTED_RESPONSE, detail=reply.body)


class MsgGeGateway(BaseSmsGateway):
    """
    msg.ge SMS gateway.

    Features:
    - One GET request per message with a bounded timeout
    - JSON and plain-text reply parsing
    - Provider codes mapped to SendFailureReason
    """

    name = "msg_ge"

    def __init__(
        self,
        config: GatewayConfig,
        client: Optional[httpx.AsyncClient] = None,
        phone_length: int = DEFAULT_PHONE_LENGTH,
    ):
        """
        Args:
            config: API credentials and endpoint
            client: Optional pre-built HTTP client (tests, shared pools)
            phone_length: Digits in a local phone key
        """
        self.config = config
        self.phone_length = phone_length
        self._client = client
        self._owns_client = client is None

    def is_configured(self) -> bool:
        return self.config.is_configured()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.config.timeout)
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
        await super().close()

    async def send(self, destination: str, message: str) -> SendResult:
        """Send SMS via msg.ge."""
        if not self.is_configured():
            logger.error(
                "SMS API not configured",
                provider=self.name,
                missing=[
                    name for name in ("api_username", "api_password", "client_id", "service_id")
                    if not getattr(self.config, name).strip()
                ],
            )
            return SendResult.failed(SendFailureReason.UNCONFIGURED, detail="missing credentials")

        params = {
            "username": self.config.api_username,
            "password": self.config.api_password,
            "client_id": self.config.client_id,
            "service_id": self.config.service_id,
            "to": to_international(destination, self.phone_length, self.config.country_prefix),
            "text": message,
            "result": "json",
        }

        start = time.perf_counter()
        try:
            response = await self._get_client().get(
                self.config.api_url,
                params=params,
                timeout=self.config.timeout,
            )
        except httpx.HTTPError as e:
            record_gateway_send(self.name, "transport_error", time.perf_counter() - start)
            logger.error(
                "msg.ge send failed",
                phone=mask_phone_key(destination),
                error_type=type(e).__name__,
            )
            return SendResult.failed(SendFailureReason.TRANSPORT_ERROR, detail=type(e).__name__)

        result = reply_to_result(parse_provider_reply(response.text))
        outcome = "success" if result.success else result.reason.value
        record_gateway_send(self.name, outcome, time.perf_counter() - start)

        if result.success:
            logger.info(
                "SMS sent",
                provider=self.name,
                phone=mask_phone_key(destination),
                message_id=result.message_id,
            )
        elif result.reason == SendFailureReason.BAD_CREDENTIALS:
            logger.error(
                "msg.ge rejected credentials or caller IP",
                provider=self.name,
                http_status=response.status_code,
                detail=result.detail,
            )
        else:
            logger.warning(
                "msg.ge send rejected",
                provider=self.name,
                phone=mask_phone_key(destination),
                reason=result.reason.value,
                http_status=response.status_code,
                detail=result.detail,
            )

        return result
