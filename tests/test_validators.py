"""
Tests for the field validators.

Tests cover:
- GTIN check digit calculation and validation
- GS1 date decoding (century pivot, day-00 convention, leap years)
- Expiration date-time decoding
- Weight and count normalisation
- Expiry window arithmetic
- Derived product code
"""

from datetime import date, datetime, timezone

import pytest

from gs1_decoder.validators import (
    calculate_gtin_check_digit,
    decode_gs1_date,
    decode_gs1_datetime,
    decode_weight,
    derive_product_code,
    expiry_window,
    is_valid_gtin,
    validate_count,
    validate_gtin,
)


class TestCheckDigit:
    """Tests for GTIN check digit calculation and validation."""

    def test_calculate_reference_gtin(self):
        """Reversed weighted sum 109, nearest ten 110, check digit 1."""
        assert calculate_gtin_check_digit("1234567890123") == 1

    def test_calculate_padded_ean13(self):
        assert calculate_gtin_check_digit("0123456789012") == 8

    def test_calculate_multiple_of_ten(self):
        """A sum already on a multiple of ten gives check digit 0."""
        assert calculate_gtin_check_digit("0000000000000") == 0

    def test_calculate_rejects_non_numeric(self):
        with pytest.raises(ValueError):
            calculate_gtin_check_digit("12AB")

    def test_validate_gtin_valid(self):
        result = validate_gtin("12345678901231")
        assert result.valid
        assert result.value == "12345678901231"
        assert result.meta['calculated_check_digit'] == 1

    def test_validate_gtin_invalid(self):
        result = validate_gtin("12345678901232")
        assert not result.valid
        assert result.value == "12345678901232"
        assert 'check digit mismatch' in result.errors[0].lower()

    @pytest.mark.parametrize("value", ["1234567890123", "1234567890123A", ""])
    def test_validate_gtin_wrong_shape(self, value):
        assert not validate_gtin(value).valid

    def test_is_valid_gtin(self):
        assert is_valid_gtin("00036000291452")
        assert not is_valid_gtin("00036000291453")


class TestDateDecoding:
    """Tests for YYMMDD date decoding."""

    def test_plain_date(self):
        result = decode_gs1_date("241231")
        assert result.valid
        assert result.value == "2024-12-31"
        assert result.meta['date'] == date(2024, 12, 31)

    def test_century_pivot_upper(self):
        """YY >= 50 belongs to the 1900s."""
        assert decode_gs1_date("500101").value == "1950-01-01"
        assert decode_gs1_date("990101").value == "1999-01-01"

    def test_century_pivot_lower(self):
        """YY < 50 belongs to the 2000s."""
        assert decode_gs1_date("490101").value == "2049-01-01"

    def test_custom_century_pivot(self):
        assert decode_gs1_date("500101", century_pivot=51).value == "2050-01-01"

    def test_leap_day_2000(self):
        result = decode_gs1_date("000229")
        assert result.valid
        assert result.value == "2000-02-29"

    def test_leap_day_non_leap_year(self):
        assert not decode_gs1_date("230229").valid

    def test_day_zero_end_of_month(self):
        result = decode_gs1_date("241200")
        assert result.valid
        assert result.value == "2024-12-31"
        assert result.meta['day_unspecified']

    def test_day_zero_february_leap(self):
        assert decode_gs1_date("240200").value == "2024-02-29"
        assert decode_gs1_date("250200").value == "2025-02-28"

    @pytest.mark.parametrize("value", ["241399", "240001"])
    def test_invalid_month(self, value):
        result = decode_gs1_date(value)
        assert not result.valid
        assert 'month' in result.errors[0].lower()
        assert result.value == value

    def test_invalid_day(self):
        assert not decode_gs1_date("240431").valid
        assert not decode_gs1_date("240132").valid

    @pytest.mark.parametrize("value", ["24123", "2412311", "24AB31"])
    def test_wrong_shape(self, value):
        assert not decode_gs1_date(value).valid


class TestDateTimeDecoding:
    """Tests for YYMMDDHHMM expiration times."""

    def test_valid(self):
        result = decode_gs1_datetime("2412311530")
        assert result.valid
        assert result.value == "2024-12-31T15:30"

    def test_invalid_hour(self):
        result = decode_gs1_datetime("2412312430")
        assert not result.valid
        assert 'hour' in result.errors[0].lower()

    def test_invalid_minute(self):
        assert not decode_gs1_datetime("2412312360").valid

    def test_invalid_date_part(self):
        assert not decode_gs1_datetime("2413011200").valid


class TestWeightAndCount:
    """Tests for implied-decimal weights and counts."""

    def test_weight_two_decimals(self):
        result = decode_weight("001500", 2, "kg")
        assert result.valid
        assert result.value == "15.00 kg"
        assert result.meta['amount'] == 15.0

    def test_weight_three_decimals(self):
        assert decode_weight("001234", 3, "kg").value == "1.234 kg"

    def test_weight_no_decimals(self):
        assert decode_weight("000015", 0, "lb").value == "15 lb"

    def test_weight_without_unit(self):
        assert decode_weight("001500", 1).value == "150.0"

    def test_weight_non_numeric(self):
        result = decode_weight("00A500", 2, "kg")
        assert not result.valid
        assert result.value == "00A500"

    def test_count(self):
        assert validate_count("00012").value == "12"
        assert not validate_count("12A").valid


class TestNonAsciiDigits:
    """Only ASCII 0-9 count as digits."""

    def test_check_digit_rejects_superscript(self):
        with pytest.raises(ValueError, match="numeric"):
            calculate_gtin_check_digit("123456789012\u00b3")

    def test_gtin(self):
        result = validate_gtin("123456789012\u00b31")
        assert not result.valid
        assert result.errors == ["GTIN must be exactly 14 digits"]

    def test_date(self):
        assert not decode_gs1_date("2412\u00b31").valid

    def test_datetime(self):
        assert not decode_gs1_datetime("24123115\u00b90").valid

    def test_weight(self):
        assert not decode_weight("00\u00b9500", 2, "kg").valid

    def test_count(self):
        assert not validate_count("1\u00b2").valid

    def test_arabic_indic_digits(self):
        assert not is_valid_gtin("\u0660\u0661\u0662\u0663\u0664\u0665\u0666\u0667\u0668\u0669\u0660\u0661\u0662\u0668")


class TestExpiryWindow:
    """Tests for expiry comparison against a reference time."""

    def test_future_expiry(self):
        expired, days = expiry_window(date(2024, 12, 31), datetime(2024, 12, 1, 12, 0))
        assert not expired
        assert days == 31

    def test_expiry_day_itself_not_expired(self):
        """Expiry is reached only at the end of the printed day."""
        expired, days = expiry_window(date(2024, 12, 31), datetime(2024, 12, 31, 18, 0))
        assert not expired
        assert days == 1

    def test_past_expiry(self):
        expired, days = expiry_window(date(2024, 12, 31), datetime(2025, 1, 2, 12, 0))
        assert expired
        assert days == -1

    def test_aware_now_converted_to_local(self):
        """The exact day count depends on the local UTC offset."""
        now = datetime(2024, 12, 1, 12, 0, tzinfo=timezone.utc)
        expired, days = expiry_window(date(2024, 12, 31), now)
        assert not expired
        assert 30 <= days <= 32


class TestDerivedProductCode:
    """Tests for the heuristic NDC-like product code."""

    def test_regrouping(self):
        assert derive_product_code("12345678901231") == "34567-8901-23"

    def test_requires_gtin14(self):
        assert derive_product_code("1234567890128") is None
        assert derive_product_code(None) is None
