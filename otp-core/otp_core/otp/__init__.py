"""
OTP Lifecycle
=============
Code issuance and verification, proof tokens and submission checks.
"""

from .models import OtpState, RequestCodeResult, SubmitCodeResult
from .codes import (
    generate_code,
    is_code_format,
    generate_salt,
    hash_code,
    verify_code,
    generate_proof_token,
    hash_token,
    verify_token,
)
from .engine import OtpEngine
from .proof import ProofConsumer
from .policy import DEFAULT_FORM_RULES, VerificationPolicy, SubmissionGuard

__all__ = [
    # Models
    "OtpState",
    "RequestCodeResult",
    "SubmitCodeResult",
    # Codes
    "generate_code",
    "is_code_format",
    "generate_salt",
    "hash_code",
    "verify_code",
    "generate_proof_token",
    "hash_token",
    "verify_token",
    # Engine
    "OtpEngine",
    "ProofConsumer",
    # Policy
    "DEFAULT_FORM_RULES",
    "VerificationPolicy",
    "SubmissionGuard",
]
