"""
Symbology classification for scanned strings.

Decides whether a scan is a plain linear code (EAN-13 / UPC-A) or a GS1
element string, and infers the GS1 symbology after extraction.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Sequence, Tuple

from ..validators.validators import is_valid_gtin


class Symbology(str, Enum):
    """Barcode symbology reported in a decode result."""
    EAN_13 = "EAN-13"
    UPC_A = "UPC-A"
    GS1_128 = "GS1-128"
    GS1_DATAMATRIX = "GS1-DataMatrix"
    UNKNOWN = "UNKNOWN"


# Symbology identifier prefixes (ISO/IEC 15424) stripped before parsing
SYMBOLOGY_PREFIXES: Tuple[str, ...] = (']d2', ']Q3', ']C1')

LINEAR_PATTERN = re.compile(r'^[0-9]{12,13}$')

GTIN_LENGTH = 14


def strip_symbology_identifier(
    text: str,
    prefixes: Sequence[str] = SYMBOLOGY_PREFIXES,
) -> Tuple[str, Optional[str]]:
    """
    Strip a known symbology identifier prefix.

    Returns:
        (stripped_text, identifier) where identifier is None if none matched
    """
    for prefix in prefixes:
        if text.startswith(prefix):
            return text[len(prefix):], prefix
    return text, None


def classify_linear(text: str) -> Optional[Tuple[Symbology, str]]:
    """
    Recognise a checksum-valid EAN-13 or UPC-A code.

    Returns:
        (symbology, padded_gtin) or None when the text is not a valid linear code
    """
    if not LINEAR_PATTERN.match(text):
        return None

    padded = text.zfill(GTIN_LENGTH)
    if not is_valid_gtin(padded):
        return None

    symbology = Symbology.EAN_13 if len(text) == 13 else Symbology.UPC_A
    return symbology, padded


def infer_gs1_symbology(
    data: str,
    has_gtin: bool,
    has_lot_serial_or_expiry: bool,
    datamatrix_threshold: int = 40,
) -> Symbology:
    """
    Guess the GS1 symbology of an element string.

    Heuristic only: the decoder never sees the optical symbol, so long
    payloads carrying GTIN plus batch/serial/expiry are reported as
    DataMatrix and everything else with a GTIN as GS1-128.
    """
    if not has_gtin:
        return Symbology.UNKNOWN
    if has_lot_serial_or_expiry and len(data) > datamatrix_threshold:
        return Symbology.GS1_DATAMATRIX
    return Symbology.GS1_128
