"""
Output formatters for the GS1 scan decoder.
"""

from .json_formatter import (
    decode_gs1_to_json,
    decode_gs1_to_dict,
    format_decode_result,
    format_decode_result_json,
    prepare_for_stock_entry,
)

__all__ = [
    "decode_gs1_to_json",
    "decode_gs1_to_dict",
    "format_decode_result",
    "format_decode_result_json",
    "prepare_for_stock_entry",
]
