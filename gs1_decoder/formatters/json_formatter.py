"""
JSON Formatter for GS1 Scan Decoder

Provides clean JSON output with:
- Human-readable field names
- Date formatting (dd/mm/yyyy)
- A stock-entry prefill dict built from the decoded scan
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Union

from ..core.ai_rules import ValueType, get_rule_table
from ..core.decoder import DecodeOptions, DecodeResult, DecodedField, decode_gs1


# AI Code to Human-Readable Name Mapping
AI_FIELD_NAMES = {
    "00": "SSCC",
    "01": "GTIN Code",
    "02": "GTIN of Content",
    "10": "Batch/Lot Number",
    "11": "Production Date",
    "12": "Due Date",
    "13": "Packaging Date",
    "15": "Best Before Date",
    "17": "Expiry Date",
    "20": "Variant",
    "21": "Serial Number",
    "30": "Variable Count",
    "37": "Count of Trade Items",
    "400": "Customer Purchase Order",
    "7003": "Expiry Time",
}


def format_date_ddmmyyyy(iso_date: str) -> str:
    """Format an ISO date (YYYY-MM-DD) as dd/mm/yyyy."""
    if len(iso_date) == 10 and iso_date[4] == "-" and iso_date[7] == "-":
        return f"{iso_date[8:10]}/{iso_date[5:7]}/{iso_date[0:4]}"
    return iso_date


def _field_name(decoded: DecodedField) -> str:
    return AI_FIELD_NAMES.get(decoded.ai, decoded.label or f"AI({decoded.ai})")


def _display_value(decoded: DecodedField) -> str:
    rule = get_rule_table().get(decoded.ai)
    if decoded.is_valid and rule is not None and rule.value_type == ValueType.DATE:
        return format_date_ddmmyyyy(decoded.normalized_value)
    return decoded.normalized_value


def format_decode_result(
    result: DecodeResult,
    include_raw_values: bool = False,
    include_warnings: bool = False,
) -> Dict[str, Any]:
    """
    Build a name -> value dict from a decode result.

    Args:
        result: Result from decode_gs1()
        include_raw_values: Emit {"formatted", "raw"} pairs instead of plain values
        include_warnings: Add "_success" and "_warnings" keys
    """
    output: Dict[str, Any] = {}

    for decoded in result.fields.values():
        value = _display_value(decoded)
        if include_raw_values:
            output[_field_name(decoded)] = {
                "formatted": value,
                "raw": decoded.raw_value,
            }
        else:
            output[_field_name(decoded)] = value

    if include_warnings:
        output["_success"] = result.success
        output["_warnings"] = list(result.warnings)

    return output


def format_decode_result_json(
    result: DecodeResult,
    include_raw_values: bool = False,
    include_warnings: bool = False,
) -> str:
    """Format a decode result as JSON with human-readable field names."""
    output = format_decode_result(
        result,
        include_raw_values=include_raw_values,
        include_warnings=include_warnings,
    )
    return json.dumps(output, ensure_ascii=False, indent=2)


def decode_gs1_to_json(
    barcode_data: str,
    include_raw_values: bool = False,
    include_warnings: bool = False,
    options: Optional[DecodeOptions] = None,
) -> str:
    """
    Decode a scan and return JSON output.

    Example:
        >>> print(decode_gs1_to_json("(01)12345678901231(17)241231(10)LOT99"))
        {
          "GTIN Code": "12345678901231",
          "Expiry Date": "31/12/2024",
          "Batch/Lot Number": "LOT99"
        }
    """
    result = decode_gs1(barcode_data, options=options)
    return format_decode_result_json(
        result,
        include_raw_values=include_raw_values,
        include_warnings=include_warnings,
    )


def decode_gs1_to_dict(
    barcode_data: str,
    include_warnings: bool = False,
    options: Optional[DecodeOptions] = None,
) -> Dict[str, Any]:
    """Decode a scan and return a name -> value dictionary."""
    return json.loads(decode_gs1_to_json(
        barcode_data,
        include_warnings=include_warnings,
        options=options,
    ))


def prepare_for_stock_entry(scan: Union[str, DecodeResult]) -> Dict[str, Any]:
    """
    Build the prefill data for the stock-entry form.

    ``needs_manual_entry`` tells the form to ask for batch and expiry by
    hand because the scan failed or did not carry them.

    Example:
        >>> prepare_for_stock_entry("(01)12345678901231(17)241231(10)LOT99")
        {'gtin': '12345678901231', 'batch_number': 'LOT99',
         'expiry_date': '2024-12-31', 'serial_number': None,
         'raw_data': '(01)12345678901231(17)241231(10)LOT99',
         'needs_manual_entry': False}
    """
    result = decode_gs1(scan) if isinstance(scan, str) else scan

    return {
        "gtin": result.gtin,
        "batch_number": result.batch_number,
        "expiry_date": result.expiry_date_iso,
        "serial_number": result.serial_number,
        "raw_data": result.raw_input,
        "needs_manual_entry": not (
            result.success and result.batch_number and result.expiry_date_iso
        ),
    }
