"""
OTP Core Configuration
======================
Settings for the OTP lifecycle and the SMS gateway connection.
"""

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class OTPConfig:
    """Configuration for code issuance, verification and rate limiting."""
    phone_length: int = 9
    country_prefix: str = "995"
    code_length: int = 6
    expiry_seconds: int = 300  # 5 minutes
    proof_ttl_seconds: int = 300
    proof_token_bytes: int = 32
    max_send: int = 3
    send_window_seconds: int = 600  # 10 minutes
    max_verify: int = 5
    verify_window_seconds: int = 900  # 15 minutes
    # Availability over strict enforcement when the counter store is down.
    fail_open_on_store_error: bool = True
    verify_key_includes_origin: bool = False
    message_template: str = "თქვენი ვერიფიკაციის კოდია: {code}"

    @property
    def verify_lockout_minutes(self) -> int:
        return max(1, self.verify_window_seconds // 60)

    @classmethod
    def from_env(cls) -> "OTPConfig":
        """Build a config from ``OTP_*`` environment variables."""
        defaults = cls()
        return cls(
            phone_length=int(os.getenv("OTP_PHONE_LENGTH", defaults.phone_length)),
            country_prefix=os.getenv("OTP_COUNTRY_PREFIX", defaults.country_prefix),
            code_length=int(os.getenv("OTP_CODE_LENGTH", defaults.code_length)),
            expiry_seconds=int(os.getenv("OTP_EXPIRY_SECONDS", defaults.expiry_seconds)),
            proof_ttl_seconds=int(
                os.getenv("OTP_PROOF_TTL_SECONDS", defaults.proof_ttl_seconds)
            ),
            proof_token_bytes=int(
                os.getenv("OTP_PROOF_TOKEN_BYTES", defaults.proof_token_bytes)
            ),
            max_send=int(os.getenv("OTP_MAX_SEND", defaults.max_send)),
            send_window_seconds=int(
                os.getenv("OTP_SEND_WINDOW_SECONDS", defaults.send_window_seconds)
            ),
            max_verify=int(os.getenv("OTP_MAX_VERIFY", defaults.max_verify)),
            verify_window_seconds=int(
                os.getenv("OTP_VERIFY_WINDOW_SECONDS", defaults.verify_window_seconds)
            ),
            fail_open_on_store_error=_env_bool(
                "OTP_FAIL_OPEN_ON_STORE_ERROR", defaults.fail_open_on_store_error
            ),
            verify_key_includes_origin=_env_bool(
                "OTP_VERIFY_KEY_INCLUDES_ORIGIN", defaults.verify_key_includes_origin
            ),
            message_template=os.getenv(
                "OTP_MESSAGE_TEMPLATE", defaults.message_template
            ),
        )


@dataclass
class GatewayConfig:
    """Credentials and endpoint for the msg.ge SMS API."""
    api_username: str = ""
    api_password: str = ""
    client_id: str = ""
    service_id: str = ""
    api_url: str = "http://bi.msg.ge/sendsms.php"
    timeout: float = 30.0
    country_prefix: str = "995"

    def is_configured(self) -> bool:
        return all(
            value.strip()
            for value in (self.api_username, self.api_password, self.client_id, self.service_id)
        )

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        """Build a config from ``SMS_API_*`` environment variables."""
        defaults = cls()
        return cls(
            api_username=os.getenv("SMS_API_USERNAME", ""),
            api_password=os.getenv("SMS_API_PASSWORD", ""),
            client_id=os.getenv("SMS_API_CLIENT_ID", ""),
            service_id=os.getenv("SMS_API_SERVICE_ID", ""),
            api_url=os.getenv("SMS_API_URL", defaults.api_url),
            timeout=float(os.getenv("SMS_API_TIMEOUT", defaults.timeout)),
            country_prefix=os.getenv("SMS_API_COUNTRY_PREFIX", defaults.country_prefix),
        )
