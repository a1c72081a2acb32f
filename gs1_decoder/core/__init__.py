"""
Core decoding modules for the GS1 scan decoder.
"""

from .decoder import decode_gs1, DecodeOptions, DecodeResult, DecodedField, GS1Decoder
from .ai_rules import AIRule, AIRuleTable, ValueType, get_rule_table
from .classifier import Symbology
from .issues import DecodeIssue, WarningCode

__all__ = [
    "decode_gs1",
    "DecodeOptions",
    "DecodeResult",
    "DecodedField",
    "GS1Decoder",
    "AIRule",
    "AIRuleTable",
    "ValueType",
    "get_rule_table",
    "Symbology",
    "DecodeIssue",
    "WarningCode",
]
