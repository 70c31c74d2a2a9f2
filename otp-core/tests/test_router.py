"""
Tests for the FastAPI OTP router.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from otp_core.api import create_otp_router
from otp_core.gateway import SendFailureReason, SendResult
from otp_core.otp import OtpEngine

PHONE = "599620303"


def make_client(engine: OtpEngine) -> TestClient:
    app = FastAPI()
    app.include_router(create_otp_router(engine))
    return TestClient(app)


@pytest.fixture
def client(engine):
    return make_client(engine)


class TestRequestEndpoint:
    """POST /otp/request"""

    def test_success(self, client, gateway):
        response = client.post("/otp/request", json={"phone": PHONE})

        assert response.status_code == 200
        assert response.json() == {"success": True, "expiresInSeconds": 300}
        assert gateway.sent[0][0] == PHONE

    def test_invalid_phone(self, client):
        response = client.post("/otp/request", json={"phone": "123"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "invalidPhone"
        assert body["errorMessage"] == "Invalid phone number. Must be 9 digits."
        assert "expiresInSeconds" not in body

    def test_operator_error_hidden(self, store, config, clock, gateway_factory):
        gateway = gateway_factory(results=[SendResult.failed(SendFailureReason.BAD_CREDENTIALS)])
        client = make_client(OtpEngine(store, gateway, config=config, clock=clock))

        body = client.post("/otp/request", json={"phone": PHONE}).json()

        assert body["error"] == "smsUnavailable"
        assert "credential" not in body["errorMessage"].lower()

    def test_rate_limit_per_origin(self, client):
        """Send quota is tracked per forwarded client address."""
        first = {"X-Forwarded-For": "203.0.113.7"}
        second = {"X-Forwarded-For": "198.51.100.2, 10.0.0.1"}

        for _ in range(3):
            assert client.post("/otp/request", json={"phone": PHONE}, headers=first).json()["success"]

        blocked = client.post("/otp/request", json={"phone": PHONE}, headers=first).json()
        assert blocked["error"] == "rateLimited"

        other = client.post("/otp/request", json={"phone": PHONE}, headers=second).json()
        assert other["success"] is True

    def test_oversized_phone_rejected(self, client):
        response = client.post("/otp/request", json={"phone": "5" * 100})
        assert response.status_code == 422

    def test_store_outage(self, unavailable_store, gateway, clock):
        client = make_client(OtpEngine(unavailable_store, gateway, clock=clock))

        response = client.post("/otp/request", json={"phone": PHONE})

        assert response.status_code == 503
        assert response.json()["detail"]["code"] == "STORE_UNAVAILABLE"
        assert gateway.sent == []


class TestVerifyEndpoint:
    """POST /otp/verify"""

    def test_round_trip(self, client, gateway, consumer):
        client.post("/otp/request", json={"phone": PHONE})

        response = client.post("/otp/verify", json={"phone": PHONE, "code": gateway.last_code})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["verifiedPhone"] == PHONE
        assert len(body["proofToken"]) >= 32
        assert "error" not in body

    def test_invalid_code(self, client, gateway):
        client.post("/otp/request", json={"phone": PHONE})
        wrong = "000000" if gateway.last_code != "000000" else "111111"

        body = client.post("/otp/verify", json={"phone": PHONE, "code": wrong}).json()

        assert body == {
            "success": False,
            "error": "invalidCode",
            "errorMessage": "Invalid OTP code.",
        }

    def test_missing_fields(self, client):
        body = client.post("/otp/verify", json={}).json()
        assert body["error"] == "invalidFormat"

    def test_store_outage(self, unavailable_store, gateway, clock):
        client = make_client(OtpEngine(unavailable_store, gateway, clock=clock))

        response = client.post("/otp/verify", json={"phone": PHONE, "code": "123456"})

        assert response.status_code == 503
