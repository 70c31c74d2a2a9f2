"""
Shared fixtures for otp-core tests.
"""

import re

import pytest

from otp_core.config import OTPConfig
from otp_core.errors import StoreUnavailableError
from otp_core.gateway import BaseSmsGateway, SendResult
from otp_core.otp import OtpEngine, ProofConsumer
from otp_core.store import ExpiringStore, InMemoryExpiringStore


class FakeClock:
    """Manually advanced Unix clock."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingGateway(BaseSmsGateway):
    """Gateway that records messages and replays queued results."""

    name = "recording"

    def __init__(self, results=None, configured: bool = True):
        self.sent = []
        self.results = list(results or [])
        self.configured = configured

    def is_configured(self) -> bool:
        return self.configured

    async def send(self, destination: str, message: str) -> SendResult:
        self.sent.append((destination, message))
        if self.results:
            return self.results.pop(0)
        return SendResult.ok(f"msg-{len(self.sent)}")

    @property
    def last_code(self) -> str:
        return re.search(r"[0-9]{6}", self.sent[-1][1]).group(0)


class UnavailableStore(ExpiringStore):
    """Store whose backend is always down."""

    async def get(self, key):
        raise StoreUnavailableError("down")

    async def set(self, key, value, ttl_seconds):
        raise StoreUnavailableError("down")

    async def delete(self, key):
        raise StoreUnavailableError("down")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config():
    return OTPConfig()


@pytest.fixture
def store(clock):
    return InMemoryExpiringStore(clock=clock)


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def engine(store, gateway, config, clock):
    return OtpEngine(store, gateway, config=config, clock=clock)


@pytest.fixture
def consumer(store, config, clock):
    return ProofConsumer(store, config=config, clock=clock)


@pytest.fixture
def unavailable_store():
    return UnavailableStore()


@pytest.fixture
def gateway_factory():
    return RecordingGateway
