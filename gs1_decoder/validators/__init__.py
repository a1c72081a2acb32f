"""
Validation modules for the GS1 scan decoder.
"""

from .validators import (
    calculate_gtin_check_digit,
    validate_gtin,
    is_valid_gtin,
    decode_gs1_date,
    decode_gs1_datetime,
    decode_weight,
    validate_count,
    expiry_window,
    derive_product_code,
    ValidationResult,
)

__all__ = [
    "calculate_gtin_check_digit",
    "validate_gtin",
    "is_valid_gtin",
    "decode_gs1_date",
    "decode_gs1_datetime",
    "decode_weight",
    "validate_count",
    "expiry_window",
    "derive_product_code",
    "ValidationResult",
]
