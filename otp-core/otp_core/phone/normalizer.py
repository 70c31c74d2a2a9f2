"""
Phone Utilities
===============
Functions for canonicalizing phone numbers into fixed-length local keys.
"""

import re

DEFAULT_PHONE_LENGTH = 9
DEFAULT_COUNTRY_PREFIX = "995"

_NON_DIGITS = re.compile(r"[^0-9]+")  # ASCII only; other scripts never form a key


def normalize_phone_key(
    phone: str,
    length: int = DEFAULT_PHONE_LENGTH,
    country_prefix: str = DEFAULT_COUNTRY_PREFIX,
) -> str:
    """
    Normalize a raw phone number to its local subscriber key.

    Rules:
    - Strip every character that is not an ASCII digit
    - Drop the country prefix when the number is longer than ``length``
    - Keep only the last ``length`` digits

    Args:
        phone: Raw phone number as typed by the user
        length: Number of digits in a local key
        country_prefix: Country calling code without "+"

    Returns:
        The key, or "" when the input cannot produce exactly ``length`` digits
    """
    if not phone or not isinstance(phone, str):
        return ""

    digits = _NON_DIGITS.sub("", phone)

    if len(digits) > length and country_prefix and digits.startswith(country_prefix):
        digits = digits[len(country_prefix):]

    if len(digits) > length:
        digits = digits[-length:]

    return digits if len(digits) == length else ""


def is_valid_phone_key(key: str, length: int = DEFAULT_PHONE_LENGTH) -> bool:
    """Check that a key is exactly ``length`` ASCII digits."""
    return bool(key) and len(key) == length and key.isascii() and key.isdigit()


def to_international(
    key: str,
    length: int = DEFAULT_PHONE_LENGTH,
    country_prefix: str = DEFAULT_COUNTRY_PREFIX,
) -> str:
    """Prefix a local key with the country code (no "+"), e.g. 995599620303."""
    digits = _NON_DIGITS.sub("", key or "")
    if len(digits) == length:
        return f"{country_prefix}{digits}"
    return digits


def format_phone(
    phone: str,
    length: int = DEFAULT_PHONE_LENGTH,
    country_prefix: str = DEFAULT_COUNTRY_PREFIX,
) -> str:
    """
    Format a phone number for display as "+995 XXXXXXXXX".

    Unrecognized input is returned trimmed.
    """
    raw = (phone or "").strip()
    digits = _NON_DIGITS.sub("", raw)

    if len(digits) == length + len(country_prefix) and digits.startswith(country_prefix):
        return f"+{country_prefix} {digits[len(country_prefix):]}"

    if len(digits) == length:
        return f"+{country_prefix} {digits}"

    return raw


def mask_phone_key(key: str, visible: int = 4) -> str:
    """Mask all but the last digits for logging."""
    if not key:
        return ""
    if len(key) <= visible:
        return "*" * len(key)
    return "*" * (len(key) - visible) + key[-visible:]
