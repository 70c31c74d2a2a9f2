"""
OTP Models
==========
State and result types for the OTP lifecycle.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from ..errors import OtpErrorCode


class OtpState(str, Enum):
    """Lifecycle state of a phone key."""
    NONE = "none"
    CODE_PENDING = "code_pending"
    VERIFIED = "verified"


@dataclass
class RequestCodeResult:
    """Outcome of requestCode."""
    success: bool
    expires_in_seconds: Optional[int] = None
    error: Optional[OtpErrorCode] = None
    error_message: Optional[str] = None

    def to_response(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "expiresInSeconds": self.expires_in_seconds}
        return {
            "success": False,
            "error": self.error.public_code,
            "errorMessage": self.error_message,
        }


@dataclass
class SubmitCodeResult:
    """Outcome of submitCode."""
    success: bool
    proof_token: Optional[str] = field(default=None, repr=False)
    verified_phone: Optional[str] = None
    error: Optional[OtpErrorCode] = None
    error_message: Optional[str] = None

    def to_response(self) -> Dict[str, Any]:
        if self.success:
            return {
                "success": True,
                "proofToken": self.proof_token,
                "verifiedPhone": self.verified_phone,
            }
        return {
            "success": False,
            "error": self.error.public_code,
            "errorMessage": self.error_message,
        }
