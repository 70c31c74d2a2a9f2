"""
OTP Error Taxonomy
==================
Error codes returned by the OTP engine, plus the user-facing messages for them.

CRITICAL: Never expose internal error details to end users.
"""

from enum import Enum
from typing import Optional

from .config import OTPConfig


# Shown when the problem can only be fixed by an operator
USER_FRIENDLY_MESSAGE = "SMS service is temporarily unavailable. Please try again later."


class OtpErrorCode(str, Enum):
    """Failure categories for requestCode / submitCode."""
    INVALID_PHONE = "invalidPhone"
    INVALID_FORMAT = "invalidFormat"
    RATE_LIMITED = "rateLimited"
    VERIFY_RATE_LIMITED = "verifyRateLimited"
    CODE_EXPIRED = "codeExpired"
    INVALID_CODE = "invalidCode"
    UNCONFIGURED = "unconfigured"
    BAD_CREDENTIALS = "badCredentials"
    INVALID_DESTINATION = "invalidDestination"
    INSUFFICIENT_BALANCE = "insufficientBalance"
    TRANSPORT_ERROR = "transportError"
    UNEXPECTED_RESPONSE = "unexpectedResponse"

    @property
    def is_operator_error(self) -> bool:
        return self in (OtpErrorCode.UNCONFIGURED, OtpErrorCode.BAD_CREDENTIALS)

    @property
    def public_code(self) -> str:
        """Code safe to hand to the browser."""
        if self.is_operator_error:
            return "smsUnavailable"
        return self.value


_MESSAGES = {
    OtpErrorCode.INVALID_PHONE: "Invalid phone number. Must be {phone_length} digits.",
    OtpErrorCode.INVALID_FORMAT: "Invalid phone or code format.",
    OtpErrorCode.RATE_LIMITED: "Too many attempts. Please try again later.",
    OtpErrorCode.VERIFY_RATE_LIMITED: (
        "Too many failed verification attempts. "
        "Please wait {lockout_minutes} minutes and try again."
    ),
    OtpErrorCode.CODE_EXPIRED: "OTP expired. Please request a new code.",
    OtpErrorCode.INVALID_CODE: "Invalid OTP code.",
    OtpErrorCode.UNCONFIGURED: USER_FRIENDLY_MESSAGE,
    OtpErrorCode.BAD_CREDENTIALS: USER_FRIENDLY_MESSAGE,
    OtpErrorCode.INVALID_DESTINATION: "Invalid phone number.",
    OtpErrorCode.INSUFFICIENT_BALANCE: "SMS could not be sent. Please try again later.",
    OtpErrorCode.TRANSPORT_ERROR: "Could not reach the SMS service. Please try again later.",
    OtpErrorCode.UNEXPECTED_RESPONSE: "SMS sending failed.",
}


def user_message(code: OtpErrorCode, config: Optional[OTPConfig] = None) -> str:
    """Render the short message shown to the user for an error code."""
    config = config or OTPConfig()
    return _MESSAGES[code].format(
        phone_length=config.phone_length,
        lockout_minutes=config.verify_lockout_minutes,
    )


class OtpCoreError(Exception):
    """Base exception for unexpected OTP core failures."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class StoreUnavailableError(OtpCoreError):
    """Raised when the expiring store cannot be reached."""
    pass
