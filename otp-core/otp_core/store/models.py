"""
Store Models
============
Records persisted in the expiring store.
"""

from dataclasses import asdict, dataclass
import json


@dataclass
class OtpRecord:
    """The active code for a phone key. Only a salted digest of the code is kept."""
    code_hash: str
    salt: str
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at

    def to_json(self) -> str:
        return json.dumps(asdict(self), separators=(",", ":"))

    @classmethod
    def from_json(cls, raw: str) -> "OtpRecord":
        data = json.loads(raw)
        return cls(
            code_hash=str(data["code_hash"]),
            salt=str(data["salt"]),
            created_at=float(data["created_at"]),
            expires_at=float(data["expires_at"]),
        )


@dataclass
class ProofRecord:
    """The active proof token for a phone key, stored as a SHA-256 digest."""
    token_hash: str
    phone_key: str
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at

    def to_json(self) -> str:
        return json.dumps(asdict(self), separators=(",", ":"))

    @classmethod
    def from_json(cls, raw: str) -> "ProofRecord":
        data = json.loads(raw)
        return cls(
            token_hash=str(data["token_hash"]),
            phone_key=str(data["phone_key"]),
            created_at=float(data["created_at"]),
            expires_at=float(data["expires_at"]),
        )


@dataclass
class RateCounter:
    """Attempt counter with a fixed window."""
    count: int
    window_expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.window_expires_at

    def to_json(self) -> str:
        return json.dumps(asdict(self), separators=(",", ":"))

    @classmethod
    def from_json(cls, raw: str) -> "RateCounter":
        data = json.loads(raw)
        return cls(count=int(data["count"]), window_expires_at=float(data["window_expires_at"]))
