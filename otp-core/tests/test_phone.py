"""
Tests for phone normalization and formatting.
"""

import pytest

from otp_core.phone import (
    format_phone,
    is_valid_phone_key,
    mask_phone_key,
    normalize_phone_key,
    to_international,
)


class TestNormalizePhoneKey:
    """Tests for normalize_phone_key."""

    def test_local_number(self):
        """Should keep a bare 9-digit number."""
        assert normalize_phone_key("599620303") == "599620303"

    def test_international_number(self):
        """Should strip the +995 prefix."""
        assert normalize_phone_key("+995599620303") == "599620303"
        assert normalize_phone_key("+995 599 62 03 03") == "599620303"

    def test_same_key_for_both_forms(self):
        """Local and international input should share one key."""
        assert normalize_phone_key("+995599620303") == normalize_phone_key("599620303")

    def test_separators_are_ignored(self):
        """Should strip spaces, dashes and brackets."""
        assert normalize_phone_key("(599) 62-03-03") == "599620303"

    def test_keeps_last_digits_when_too_long(self):
        """Should truncate to the last 9 digits for an unknown prefix."""
        assert normalize_phone_key("00380599620303") == "599620303"

    def test_short_numbers_are_invalid(self):
        """Should return the empty sentinel for short input."""
        assert normalize_phone_key("59962030") == ""
        assert normalize_phone_key("") == ""
        assert normalize_phone_key("no digits here") == ""

    def test_non_string_input(self):
        """Should never raise on odd input."""
        assert normalize_phone_key(None) == ""

    @pytest.mark.parametrize(
        "raw",
        ["٥٩٩٦٢٠٣٠٣", "５99620303", "+995 5９9620303", "۵۹۹۶۲۰۳۰۳"],
    )
    def test_non_ascii_digits_are_invalid(self, raw):
        """Should accept only ASCII digits so each phone has one key."""
        assert normalize_phone_key(raw) == ""

    @pytest.mark.parametrize(
        "raw",
        ["+995599620303", "599620303", "995 599 620 303", "+995-599-620-303", "12"],
    )
    def test_idempotent(self, raw):
        """Normalizing twice should equal normalizing once."""
        once = normalize_phone_key(raw)
        assert normalize_phone_key(once) == once

    def test_configurable_length(self):
        """Should honor a custom key length and prefix."""
        assert normalize_phone_key("+1 415 555 1234", length=10, country_prefix="1") == "4155551234"


class TestPhoneHelpers:
    """Tests for display and logging helpers."""

    def test_is_valid_phone_key(self):
        assert is_valid_phone_key("599620303") is True
        assert is_valid_phone_key("59962030") is False
        assert is_valid_phone_key("") is False

    def test_to_international(self):
        """Should prefix a local key with the country code."""
        assert to_international("599620303") == "995599620303"

    def test_format_phone(self):
        """Should format for display with +995."""
        assert format_phone("599620303") == "+995 599620303"
        assert format_phone("995599620303") == "+995 599620303"
        assert format_phone("  12345  ") == "12345"

    def test_mask_phone_key(self):
        """Should hide all but the last four digits."""
        assert mask_phone_key("599620303") == "*****0303"
        assert mask_phone_key("") == ""
