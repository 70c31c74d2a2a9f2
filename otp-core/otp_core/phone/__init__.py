"""
Phone Normalization
===================
Canonical phone keys used by every piece of OTP state.
"""

from .normalizer import (
    DEFAULT_COUNTRY_PREFIX,
    DEFAULT_PHONE_LENGTH,
    normalize_phone_key,
    is_valid_phone_key,
    to_international,
    format_phone,
    mask_phone_key,
)

__all__ = [
    "DEFAULT_COUNTRY_PREFIX",
    "DEFAULT_PHONE_LENGTH",
    "normalize_phone_key",
    "is_valid_phone_key",
    "to_international",
    "format_phone",
    "mask_phone_key",
]
