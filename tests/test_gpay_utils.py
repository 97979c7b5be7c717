"""
Utility tests: amount coercion, epoch timestamps and credential masking
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import patch

import pytest

from utils.data_sanitizer import mask_api_key_safe, sanitize_headers_for_log
from utils.datetime_helpers import current_epoch_millis, epoch_millis_to_datetime
from utils.decimal_precision import MonetaryDecimal


class TestMonetaryDecimal:

    @pytest.mark.parametrize("value,expected", [
        ("49.90", Decimal("49.9")),
        (" 10 ", Decimal("10")),
        (100, Decimal("100")),
        (0.1, Decimal("0.1")),
        (Decimal("3.50"), Decimal("3.5")),
    ])
    def test_to_decimal(self, value, expected):
        assert MonetaryDecimal.to_decimal(value) == expected

    def test_none_passes_through(self):
        assert MonetaryDecimal.to_decimal(None) is None

    @pytest.mark.parametrize("value", ["abc", "", "NaN", "Infinity", True])
    def test_invalid_values(self, value):
        with pytest.raises(ValueError):
            MonetaryDecimal.to_decimal(value, "amount")

    @pytest.mark.parametrize("amount,expected", [
        (Decimal("49.90"), "49.9"),
        (Decimal("1E+2"), "100"),
        (20, "20"),
        (12.5, "12.5"),
        ("15.00", "15.00"),
    ])
    def test_format_amount(self, amount, expected):
        assert MonetaryDecimal.format_amount(amount) == expected

    @pytest.mark.parametrize("amount", [None, "ten"])
    def test_format_amount_rejects(self, amount):
        with pytest.raises(ValueError):
            MonetaryDecimal.format_amount(amount)


class TestEpochMillis:

    def test_string_and_number(self):
        expected = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
        assert epoch_millis_to_datetime("1700000000000") == expected
        assert epoch_millis_to_datetime(1700000000000) == expected

    def test_milliseconds_kept(self):
        assert epoch_millis_to_datetime("1700000000250").microsecond == 250000

    def test_none(self):
        assert epoch_millis_to_datetime(None) is None

    def test_invalid(self):
        with pytest.raises(ValueError):
            epoch_millis_to_datetime("soon")

    @pytest.mark.parametrize("value", ["1e30", "Infinity", "-Infinity", float("inf"), 10 ** 30])
    def test_out_of_range(self, value):
        with pytest.raises(ValueError):
            epoch_millis_to_datetime(value)

    def test_current_epoch_millis(self):
        with patch('utils.datetime_helpers.time.time', return_value=1700000000.5):
            assert current_epoch_millis() == "1700000000500"


class TestMasking:

    def test_mask_api_key(self):
        assert mask_api_key_safe("abcdefghijkl") == "[API_KEY:ab***kl]"
        assert mask_api_key_safe(None) == "[NO_API_KEY]"
        assert mask_api_key_safe("abc") == "[REDACTED]"

    def test_sanitize_headers(self):
        headers = {
            "Authorization": "Bearer secret",
            "X-Signature-Hash": "hash",
            "Accept-Language": "en",
        }
        sanitized = sanitize_headers_for_log(headers)
        assert sanitized["Authorization"] == "[REDACTED]"
        assert sanitized["X-Signature-Hash"] == "[REDACTED]"
        assert sanitized["Accept-Language"] == "en"
