"""
CLI interface for the GS1 scan decoder.

Usage:
    python -m gs1_decoder "<barcode text>" [options]

Options:
    --json          Output as JSON
    --raw-values    Include raw values in JSON output
    --now           Reference date for expiry checks (YYYY-MM-DD)
    --verbose       Log decoder events to stderr
"""

import argparse
import json
import sys
from datetime import datetime
from typing import Optional

from .core.decoder import DecodeResult, decode_gs1
from .formatters.json_formatter import format_decode_result
from .log import configure_logging


def format_result(result: DecodeResult) -> str:
    """Format a decode result for display."""
    lines = [
        "=" * 60,
        "GS1 Decode Result",
        "=" * 60,
        f"Raw Input: {result.raw_input!r}",
        f"Symbology: {result.symbology.value}",
    ]

    if result.symbology_identifier:
        lines.append(f"Symbology Identifier: {result.symbology_identifier}")

    lines.extend([
        f"Success: {result.success}",
        "",
        "Fields:",
        "-" * 40,
    ])

    for decoded in result.fields.values():
        lines.append(f"  AI({decoded.ai}): {decoded.label}")
        lines.append(f"    Value: {decoded.normalized_value!r}")
        if decoded.raw_value != decoded.normalized_value:
            lines.append(f"    Raw: {decoded.raw_value!r}")
        lines.append(f"    Valid: {decoded.is_valid}")
        lines.append("")

    summary = [
        ("GTIN", result.gtin),
        ("Expiry", result.expiry_date_iso),
        ("Days To Expiry", result.days_to_expiry),
        ("Batch", result.batch_number),
        ("Serial", result.serial_number),
        ("Production Date", result.production_date_iso),
        ("Net Weight", result.net_weight),
        ("Derived Product Code (unverified)", result.derived_product_code),
    ]
    lines.extend(["Summary:", "-" * 40])
    for name, value in summary:
        if value is not None:
            lines.append(f"  {name}: {value}")
    if result.expiry_date_iso:
        lines.append(f"  Expired: {result.is_expired}")
    lines.append("")

    if result.warnings:
        lines.extend(["Warnings:", "-" * 40])
        for issue in result.issues:
            lines.append(f"  [{issue.code.value}] {issue.message}")
        lines.append("")

    return '\n'.join(lines)


def _parse_now(value: str) -> datetime:
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD")


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='gs1_decoder',
        description='Decode GS1 and EAN/UPC barcode scans'
    )

    parser.add_argument(
        'barcode',
        help='Scanned barcode data'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Output result as JSON'
    )

    parser.add_argument(
        '--raw-values',
        action='store_true',
        help='Include raw values alongside formatted ones (JSON only)'
    )

    parser.add_argument(
        '--now',
        type=_parse_now,
        default=None,
        help='Reference date for expiry checks (YYYY-MM-DD, defaults to now)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Log decoder events to stderr'
    )

    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else "WARNING")

    # Scanners and shells often deliver FNC1 as a literal "<GS>"
    barcode = args.barcode.replace("<GS>", "\x1d")
    result = decode_gs1(barcode, now=args.now)

    if args.json:
        output = format_decode_result(
            result,
            include_raw_values=args.raw_values,
            include_warnings=True,
        )
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        print(format_result(result))

    return 0 if result.success else 1


if __name__ == '__main__':
    sys.exit(main())
