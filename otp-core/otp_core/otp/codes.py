"""
OTP Code Utilities
==================
Secure generation, hashing and comparison of codes and proof tokens.
"""

import hashlib
import hmac
import re
import secrets


def generate_code(length: int = 6) -> str:
    """
    Generate a secure random numeric code.

    Every digit is uniform: the value is drawn from the CSPRNG over
    [0, 10**length) and zero-padded.
    """
    return str(secrets.randbelow(10 ** length)).zfill(length)


def is_code_format(code: str, length: int = 6) -> bool:
    """Check that ``code`` is exactly ``length`` ASCII digits."""
    return isinstance(code, str) and re.fullmatch(rf"[0-9]{{{length}}}", code) is not None


def generate_salt() -> str:
    """Generate a random salt for code hashing."""
    return secrets.token_hex(16)


def hash_code(code: str, salt: str) -> str:
    """Hash a code with salt using SHA-256."""
    return hashlib.sha256(f"{salt}:{code}".encode()).hexdigest()


def verify_code(code: str, salt: str, stored_hash: str) -> bool:
    """
    Verify a code against its hash.

    Uses constant-time comparison to prevent timing attacks.
    """
    return hmac.compare_digest(hash_code(code, salt), stored_hash)


def generate_proof_token(num_bytes: int = 32) -> str:
    """Generate an opaque URL-safe proof token with ``num_bytes`` of entropy."""
    return secrets.token_urlsafe(num_bytes)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def verify_token(token: str, stored_hash: str) -> bool:
    """Constant-time comparison of a presented token with a stored digest."""
    return hmac.compare_digest(hash_token(token), stored_hash)
