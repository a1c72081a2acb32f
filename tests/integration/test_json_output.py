"""
Tests for JSON formatter output.

Ensures clean JSON output with:
- Human-readable field names
- Proper date formatting (dd/mm/yyyy)
- Stock-entry prefill data
"""

import json
from datetime import datetime

from gs1_decoder import (
    decode_gs1,
    decode_gs1_to_dict,
    decode_gs1_to_json,
    prepare_for_stock_entry,
)
from gs1_decoder.formatters import format_decode_result, format_decode_result_json


BARCODE = "(01)12345678901231(17)241231(10)LOT99(21)SN001"


class TestJSONOutput:
    """Test JSON output formatting."""

    def test_basic_json_output(self):
        data = json.loads(decode_gs1_to_json(BARCODE))

        assert data == {
            "GTIN Code": "12345678901231",
            "Expiry Date": "31/12/2024",
            "Batch/Lot Number": "LOT99",
            "Serial Number": "SN001",
        }

    def test_field_order_follows_scan(self):
        data = decode_gs1_to_dict("(10)LOT99(01)12345678901231")

        assert list(data) == ["Batch/Lot Number", "GTIN Code"]

    def test_invalid_date_shown_raw(self):
        data = decode_gs1_to_dict("(01)12345678901231(17)241399")

        assert data["Expiry Date"] == "241399"

    def test_weight_uses_label(self):
        data = decode_gs1_to_dict("(01)12345678901231(3102)001500")

        assert data["Net Weight (kg)"] == "15.00 kg"

    def test_raw_values(self):
        result = decode_gs1(BARCODE)
        data = json.loads(format_decode_result_json(result, include_raw_values=True))

        assert data["Expiry Date"] == {"formatted": "31/12/2024", "raw": "241231"}

    def test_warnings_included(self):
        data = decode_gs1_to_dict("0112345678901231XYZ", include_warnings=True)

        assert data["_success"] is False
        assert data["_warnings"] == ["Unparsed trailing data: XYZ"]

    def test_unicode_preserved(self):
        output = format_decode_result_json(decode_gs1("(10)LOTÄ1"))

        assert "LOTÄ1" in output


class TestResultDict:
    """Tests for DecodeResult.to_dict()."""

    def test_serialisable(self):
        result = decode_gs1(BARCODE, now=datetime(2024, 12, 1, 12, 0))
        data = json.loads(json.dumps(result.to_dict()))

        assert data["success"] is True
        assert data["symbology"] == "GS1-DataMatrix"
        assert data["gtin"] == "12345678901231"
        assert data["expiry_date_iso"] == "2024-12-31"
        assert data["days_to_expiry"] == 31
        assert data["fields"]["17"] == {
            "ai": "17",
            "label": "Expiration Date (YYMMDD)",
            "normalized_value": "2024-12-31",
            "raw_value": "241231",
            "is_valid": True,
        }
        assert data["raw_input"] == BARCODE

    def test_issues_serialised(self):
        data = decode_gs1("0112345678901232").to_dict()

        assert data["issues"] == [{
            "code": "INVALID_CHECK_DIGIT",
            "message": "Invalid Check Digit for AI (01)",
            "ai": "01",
        }]


class TestStockEntry:
    """Tests for stock-entry prefill data."""

    def test_complete_scan(self):
        data = prepare_for_stock_entry("(01)12345678901231(17)241231(10)LOT99")

        assert data == {
            "gtin": "12345678901231",
            "batch_number": "LOT99",
            "expiry_date": "2024-12-31",
            "serial_number": None,
            "raw_data": "(01)12345678901231(17)241231(10)LOT99",
            "needs_manual_entry": False,
        }

    def test_linear_scan_needs_manual_entry(self):
        data = prepare_for_stock_entry("1234567890128")

        assert data["gtin"] == "01234567890128"
        assert data["needs_manual_entry"] is True

    def test_failed_scan_needs_manual_entry(self):
        data = prepare_for_stock_entry("(01)12345678901231(17)241399(10)LOT99")

        assert data["expiry_date"] is None
        assert data["needs_manual_entry"] is True

    def test_accepts_decoded_result(self):
        result = decode_gs1("(01)12345678901231(17)241231(10)LOT99")

        assert prepare_for_stock_entry(result)["batch_number"] == "LOT99"

    def test_format_decode_result_plain(self):
        data = format_decode_result(decode_gs1("(01)12345678901231"))

        assert data == {"GTIN Code": "12345678901231"}
