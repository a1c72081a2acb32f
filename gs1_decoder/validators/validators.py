"""
GS1 Field Validation Functions

Per-type normalisation and validation for decoded AI values:
- GTIN check digit (AI 01, 02 and padded EAN-13/UPC-A codes)
- GS1 six-digit dates (YYMMDD) with century pivot and day-00 convention
- Expiration date-times (YYMMDDHHMM, AI 7003)
- Implied-decimal weights (AI 310x, 320x)
- Numeric counts (AI 30, 37)
- Heuristic product code derived from a GTIN

Validators never raise on bad data; they return a ValidationResult.
"""

from __future__ import annotations

import math
import re
from calendar import monthrange
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Tuple


DEFAULT_CENTURY_PIVOT = 50

# Expiry is reached at the very end of the printed day
END_OF_DAY = time(23, 59, 59, 999999)

# ASCII digits only; str.isdigit() is also true for superscripts
DIGITS_PATTERN = re.compile(r"[0-9]+")


@dataclass
class ValidationResult:
    """Result of a validation operation."""
    valid: bool
    value: Optional[str] = None
    errors: List[str] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)


def is_digits(value: str) -> bool:
    return DIGITS_PATTERN.fullmatch(value) is not None


def calculate_gtin_check_digit(digits: str) -> int:
    """
    Calculate the GS1 check digit for a digit string without its check digit.

    Algorithm:
    1. Reverse the digits
    2. Weight even positions (0-indexed) by 3, odd positions by 1
    3. Check digit = nearest multiple of ten at or above the sum, minus the sum

    Args:
        digits: Numeric string without check digit

    Returns:
        Calculated check digit (0-9)
    """
    if not is_digits(digits):
        raise ValueError("Input must be a non-empty numeric string")

    total = sum(
        int(digit) * (3 if i % 2 == 0 else 1)
        for i, digit in enumerate(reversed(digits))
    )
    nearest_ten = math.ceil(total / 10) * 10
    return nearest_ten - total


def validate_gtin(value: str) -> ValidationResult:
    """
    Validate a 14-digit GTIN check digit.

    The raw value is always returned so callers can keep what was scanned.
    """
    result = ValidationResult(valid=True, value=value)

    if len(value) != 14 or not is_digits(value):
        result.valid = False
        result.errors.append("GTIN must be exactly 14 digits")
        return result

    provided = int(value[-1])
    calculated = calculate_gtin_check_digit(value[:-1])
    result.meta['calculated_check_digit'] = calculated
    result.meta['provided_check_digit'] = provided

    if provided != calculated:
        result.valid = False
        result.errors.append(
            f"Check digit mismatch: expected {calculated}, got {provided}"
        )

    return result


def is_valid_gtin(value: str) -> bool:
    return validate_gtin(value).valid


def _resolve_date(
    yy: int,
    mm: int,
    dd: int,
    century_pivot: int,
) -> Tuple[Optional[date], Optional[str]]:
    """Apply the century pivot and day-00 rule; return (date, error)."""
    if mm < 1 or mm > 12:
        return None, f"Invalid month: {mm:02d}"

    year = 1900 + yy if yy >= century_pivot else 2000 + yy
    days_in_month = monthrange(year, mm)[1]
    day = days_in_month if dd == 0 else dd

    if day > days_in_month:
        return None, f"Day {dd} invalid for month {mm} in year {year}"

    return date(year, mm, day), None


def decode_gs1_date(
    value: str,
    century_pivot: int = DEFAULT_CENTURY_PIVOT,
) -> ValidationResult:
    """
    Decode a GS1 YYMMDD date.

    Century pivot (default 50):
    - YY >= 50: 19YY
    - YY < 50: 20YY

    DD=00 means the last calendar day of the month.

    Returns:
        ValidationResult whose value is the ISO date (YYYY-MM-DD)
    """
    result = ValidationResult(valid=False, value=value)

    if len(value) != 6 or not is_digits(value):
        result.errors.append("Date must be 6 digits (YYMMDD)")
        return result

    resolved, error = _resolve_date(
        int(value[0:2]), int(value[2:4]), int(value[4:6]), century_pivot
    )
    if error:
        result.errors.append(error)
        return result

    result.valid = True
    result.value = resolved.isoformat()
    result.meta['date'] = resolved
    result.meta['day_unspecified'] = value[4:6] == '00'
    return result


def decode_gs1_datetime(
    value: str,
    century_pivot: int = DEFAULT_CENTURY_PIVOT,
) -> ValidationResult:
    """Decode a YYMMDDHHMM expiration time into 'YYYY-MM-DDTHH:MM'."""
    result = ValidationResult(valid=False, value=value)

    if len(value) != 10 or not is_digits(value):
        result.errors.append("Date-time must be 10 digits (YYMMDDHHMM)")
        return result

    date_result = decode_gs1_date(value[:6], century_pivot)
    if not date_result.valid:
        result.errors.extend(date_result.errors)
        return result

    hh = int(value[6:8])
    mi = int(value[8:10])
    if hh > 23:
        result.errors.append(f"Invalid hour: {hh:02d}")
        return result
    if mi > 59:
        result.errors.append(f"Invalid minute: {mi:02d}")
        return result

    result.valid = True
    result.value = f"{date_result.value}T{hh:02d}:{mi:02d}"
    result.meta['date'] = date_result.meta['date']
    return result


def decode_weight(
    value: str,
    decimal_places: int,
    unit: Optional[str] = None,
) -> ValidationResult:
    """
    Decode a weight value with implied decimal places.

    Example: AI 3102, value "001500" -> "15.00 kg"
    """
    result = ValidationResult(valid=False, value=value)

    if not is_digits(value):
        result.errors.append("Weight must be numeric")
        return result

    amount = int(value) / (10 ** decimal_places)
    formatted = f"{amount:.{decimal_places}f}"
    if unit:
        formatted = f"{formatted} {unit}"

    result.valid = True
    result.value = formatted
    result.meta['amount'] = amount
    return result


def validate_count(value: str) -> ValidationResult:
    """Validate a numeric count (AI 30, 37); normalised without leading zeros."""
    result = ValidationResult(valid=False, value=value)

    if not is_digits(value):
        result.errors.append("Count must be numeric")
        return result

    result.valid = True
    result.value = str(int(value))
    return result


def expiry_window(expiry: date, now: datetime) -> Tuple[bool, int]:
    """
    Compare an expiry date (end of day) against ``now``.

    ``now`` is local wall-clock time; an aware value is converted to
    local time first.

    Returns:
        (is_expired, days_to_expiry) where days are rounded up
    """
    if now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    expires_at = datetime.combine(expiry, END_OF_DAY)
    remaining = expires_at - now
    days = math.ceil(remaining / timedelta(days=1))
    return expires_at < now, days


def derive_product_code(gtin: Optional[str]) -> Optional[str]:
    """
    Derive an NDC-like 5-4-2 product code from a GTIN-14.

    Heuristic regrouping of GTIN digits 2-12; it is NOT a registry
    lookup and must not be treated as a verified National Drug Code.
    """
    if not gtin or len(gtin) != 14:
        return None

    core = gtin[2:13]
    return f"{core[:5]}-{core[5:9]}-{core[9:]}"
