"""
Tests for configuration, error messages, logging setup and metrics.
"""

import json
import logging

import pytest
import structlog

from otp_core import configure_logging, get_metrics_text
from otp_core.config import GatewayConfig, OTPConfig
from otp_core.errors import OtpErrorCode, USER_FRIENDLY_MESSAGE, user_message
from otp_core.metrics import OTP_REGISTRY, record_store_error


class TestOTPConfig:
    """Tests for OTPConfig."""

    def test_defaults(self):
        config = OTPConfig()

        assert config.phone_length == 9
        assert config.expiry_seconds == 300
        assert config.max_send == 3
        assert config.send_window_seconds == 600
        assert config.max_verify == 5
        assert config.verify_lockout_minutes == 15
        assert "{code}" in config.message_template

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("OTP_MAX_SEND", "10")
        monkeypatch.setenv("OTP_EXPIRY_SECONDS", "120")
        monkeypatch.setenv("OTP_FAIL_OPEN_ON_STORE_ERROR", "false")
        monkeypatch.setenv("OTP_VERIFY_KEY_INCLUDES_ORIGIN", "1")

        config = OTPConfig.from_env()

        assert config.max_send == 10
        assert config.expiry_seconds == 120
        assert config.fail_open_on_store_error is False
        assert config.verify_key_includes_origin is True
        assert config.max_verify == 5


class TestGatewayConfig:
    """Tests for GatewayConfig."""

    def test_unconfigured_by_default(self):
        assert GatewayConfig().is_configured() is False

    def test_blank_credential_is_unconfigured(self):
        config = GatewayConfig(api_username="u", api_password=" ", client_id="1", service_id="2")
        assert config.is_configured() is False

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SMS_API_USERNAME", "user")
        monkeypatch.setenv("SMS_API_PASSWORD", "secret")
        monkeypatch.setenv("SMS_API_CLIENT_ID", "42")
        monkeypatch.setenv("SMS_API_SERVICE_ID", "7")
        monkeypatch.setenv("SMS_API_TIMEOUT", "5")

        config = GatewayConfig.from_env()

        assert config.is_configured() is True
        assert config.timeout == 5.0
        assert config.api_url == "http://bi.msg.ge/sendsms.php"


class TestErrorMessages:
    """Tests for user-facing error messages."""

    def test_every_code_has_message(self):
        for code in OtpErrorCode:
            assert user_message(code)

    def test_messages_follow_config(self):
        config = OTPConfig(phone_length=10, verify_window_seconds=1800)

        assert "10 digits" in user_message(OtpErrorCode.INVALID_PHONE, config)
        assert "30 minutes" in user_message(OtpErrorCode.VERIFY_RATE_LIMITED, config)

    def test_operator_errors_masked(self):
        for code in (OtpErrorCode.UNCONFIGURED, OtpErrorCode.BAD_CREDENTIALS):
            assert code.is_operator_error is True
            assert code.public_code == "smsUnavailable"
            assert user_message(code) == USER_FRIENDLY_MESSAGE

        assert OtpErrorCode.TRANSPORT_ERROR.public_code == "transportError"


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_json_output_binds_service(self, capsys, restore_logging):
        configure_logging(service_name="otp-test", level="INFO", json_output=True)
        capsys.readouterr()

        structlog.get_logger("otp_core.test").info("OTP sent", phone="*****0303")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "OTP sent"
        assert event["service"] == "otp-test"
        assert event["level"] == "info"
        assert event["phone"] == "*****0303"

    def test_level_filters(self, capsys, restore_logging):
        configure_logging(service_name="otp-test", level="WARNING")
        capsys.readouterr()

        structlog.get_logger("otp_core.test").info("hidden")

        assert "hidden" not in capsys.readouterr().out


class TestMetrics:
    """Tests for the Prometheus exposition."""

    def test_metrics_text(self):
        text = get_metrics_text().decode()

        assert "otp_code_requests_total" in text
        assert "otp_verifications_total" in text
        assert "sms_gateway_send_seconds" in text

    def test_store_error_counter(self):
        labels = {"counter": "send", "policy": "fail_open"}
        before = OTP_REGISTRY.get_sample_value("otp_rate_limit_store_errors_total", labels) or 0.0

        record_store_error("send", fail_open=True)

        assert OTP_REGISTRY.get_sample_value("otp_rate_limit_store_errors_total", labels) == before + 1
