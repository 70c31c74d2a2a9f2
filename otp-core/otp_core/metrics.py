"""
Prometheus Metrics Definitions
==============================
Counters and histograms for code issuance, verification and SMS delivery.
"""

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Custom registry so embedding services can expose OTP metrics separately
OTP_REGISTRY = CollectorRegistry()

CODE_REQUESTS_TOTAL = Counter(
    name="otp_code_requests_total",
    documentation="Outcomes of requestCode calls",
    labelnames=["outcome"],
    registry=OTP_REGISTRY,
)

VERIFICATIONS_TOTAL = Counter(
    name="otp_verifications_total",
    documentation="Outcomes of submitCode calls",
    labelnames=["outcome"],
    registry=OTP_REGISTRY,
)

GATEWAY_SEND_SECONDS = Histogram(
    name="sms_gateway_send_seconds",
    documentation="Time spent sending an SMS through the gateway",
    labelnames=["provider", "outcome"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
    registry=OTP_REGISTRY,
)

RATE_LIMIT_STORE_ERRORS = Counter(
    name="otp_rate_limit_store_errors_total",
    documentation="Rate limit checks that hit an unavailable store",
    labelnames=["counter", "policy"],
    registry=OTP_REGISTRY,
)


def record_code_request(outcome: str) -> None:
    CODE_REQUESTS_TOTAL.labels(outcome=outcome).inc()


def record_verification(outcome: str) -> None:
    VERIFICATIONS_TOTAL.labels(outcome=outcome).inc()


def record_gateway_send(provider: str, outcome: str, duration_seconds: float) -> None:
    GATEWAY_SEND_SECONDS.labels(provider=provider, outcome=outcome).observe(duration_seconds)


def record_store_error(counter: str, fail_open: bool) -> None:
    RATE_LIMIT_STORE_ERRORS.labels(
        counter=counter,
        policy="fail_open" if fail_open else "fail_closed",
    ).inc()


def get_metrics_text() -> bytes:
    """Render all OTP metrics in the Prometheus text format."""
    return generate_latest(OTP_REGISTRY)
