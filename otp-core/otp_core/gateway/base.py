"""
SMS Gateway Base
================
Base classes and result types for SMS delivery providers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import structlog

logger = structlog.get_logger(__name__)


class SendFailureReason(str, Enum):
    """Closed set of reasons a send can fail for."""
    UNCONFIGURED = "unconfigured"
    BAD_CREDENTIALS = "badCredentials"
    INVALID_DESTINATION = "invalidDestination"
    INSUFFICIENT_BALANCE = "insufficientBalance"
    TRANSPORT_ERROR = "transportError"
    UNEXPECTED_RESPONSE = "unexpectedResponse"


@dataclass
class SendResult:
    """Result of a message send operation."""
    success: bool
    message_id: Optional[str] = None
    reason: Optional[SendFailureReason] = None
    detail: Optional[str] = None  # Provider detail, for server-side logs only

    @classmethod
    def ok(cls, message_id: str) -> "SendResult":
        return cls(success=True, message_id=message_id)

    @classmethod
    def failed(cls, reason: SendFailureReason, detail: Optional[str] = None) -> "SendResult":
        return cls(success=False, reason=reason, detail=detail)


class BaseSmsGateway(ABC):
    """
    Abstract base class for SMS gateways.

    Implementations take a local phone key and are responsible for
    converting it to whatever destination format the provider expects.
    """

    name: str = "base"

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether all credentials required to send are present."""

    @abstractmethod
    async def send(self, destination: str, message: str) -> SendResult:
        """
        Send a text message.

        Args:
            destination: Local phone key
            message: Message content

        Returns:
            SendResult with the provider outcome
        """

    async def send_code(self, destination: str, code: str, template: str) -> SendResult:
        """Send a verification code rendered into ``template``."""
        return await self.send(destination, template.format(code=code))

    async def close(self) -> None:
        """Clean up resources (e.g., close HTTP clients)."""
        logger.info("SMS gateway closed", provider=self.name)

    async def __aenter__(self) -> "BaseSmsGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
