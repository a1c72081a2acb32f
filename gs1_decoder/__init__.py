"""
GS1 Scan Decoder

Decodes barcode payloads scanned at the point of sale and during stock
intake (EAN-13, UPC-A, GS1-128, GS1 DataMatrix element strings) into
product, batch and expiry information.

Based on the GS1 General Specifications for Application Identifiers.
"""

from .core.decoder import (
    decode_gs1,
    DecodeOptions,
    DecodeResult,
    DecodedField,
    GS1Decoder,
)
from .core.issues import DecodeIssue, WarningCode
from .core.classifier import Symbology
from .core.ai_rules import AIRule, AIRuleTable, ValueType, get_rule_table
from .validators.validators import (
    calculate_gtin_check_digit,
    validate_gtin,
    decode_gs1_date,
    decode_weight,
    derive_product_code,
)
from .formatters.json_formatter import (
    decode_gs1_to_json,
    decode_gs1_to_dict,
    prepare_for_stock_entry,
)
from .expiry import expiry_status, expiry_tier, is_near_expiry, ExpiryTier

__version__ = "1.0.0"
__all__ = [
    "decode_gs1",
    "DecodeOptions",
    "DecodeResult",
    "DecodedField",
    "GS1Decoder",
    "DecodeIssue",
    "WarningCode",
    "Symbology",
    "AIRule",
    "AIRuleTable",
    "ValueType",
    "get_rule_table",
    "calculate_gtin_check_digit",
    "validate_gtin",
    "decode_gs1_date",
    "decode_weight",
    "derive_product_code",
    "decode_gs1_to_json",
    "decode_gs1_to_dict",
    "prepare_for_stock_entry",
    "expiry_status",
    "expiry_tier",
    "is_near_expiry",
    "ExpiryTier",
]
