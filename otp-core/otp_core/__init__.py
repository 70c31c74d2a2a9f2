"""
OTP Core Library
================
Phone ownership verification over SMS: one-time codes, rate limits and proof tokens.
"""

__version__ = "0.1.0"

# Configuration
from otp_core.config import OTPConfig, GatewayConfig

# Errors
from otp_core.errors import (
    OtpErrorCode,
    OtpCoreError,
    StoreUnavailableError,
    user_message,
)

# Phone
from otp_core.phone import (
    normalize_phone_key,
    is_valid_phone_key,
    to_international,
    format_phone,
    mask_phone_key,
)

# Gateway
from otp_core.gateway import (
    BaseSmsGateway,
    MsgGeGateway,
    SendFailureReason,
    SendResult,
    parse_provider_reply,
)

# Storage
from otp_core.store import (
    ExpiringStore,
    InMemoryExpiringStore,
    RedisExpiringStore,
    OtpStore,
)

# Rate Limiting
from otp_core.rate_limit import (
    OtpRateLimiter,
    RateLimitInfo,
    RateLimitResult,
    resolve_client_origin,
)

# OTP
from otp_core.otp import (
    OtpEngine,
    OtpState,
    ProofConsumer,
    RequestCodeResult,
    SubmitCodeResult,
    SubmissionGuard,
    VerificationPolicy,
)

# Logging / Metrics
from otp_core.log_config import configure_logging
from otp_core.metrics import get_metrics_text

__all__ = [
    # Configuration
    "OTPConfig",
    "GatewayConfig",
    # Errors
    "OtpErrorCode",
    "OtpCoreError",
    "StoreUnavailableError",
    "user_message",
    # Phone
    "normalize_phone_key",
    "is_valid_phone_key",
    "to_international",
    "format_phone",
    "mask_phone_key",
    # Gateway
    "BaseSmsGateway",
    "MsgGeGateway",
    "SendFailureReason",
    "SendResult",
    "parse_provider_reply",
    # Storage
    "ExpiringStore",
    "InMemoryExpiringStore",
    "RedisExpiringStore",
    "OtpStore",
    # Rate Limiting
    "OtpRateLimiter",
    "RateLimitInfo",
    "RateLimitResult",
    "resolve_client_origin",
    # OTP
    "OtpEngine",
    "OtpState",
    "ProofConsumer",
    "RequestCodeResult",
    "SubmitCodeResult",
    "SubmissionGuard",
    "VerificationPolicy",
    # Logging / Metrics
    "configure_logging",
    "get_metrics_text",
]
