"""
GS1 Scan Decoder

Turns a scanned barcode string into product, batch and expiry data for
the point-of-sale and stock-intake screens.

Pipeline (one way, no state kept between calls):
    raw string -> symbology classifier -> field extractor (AI rule table)
               -> field validators -> result assembler -> DecodeResult

Key rules:
- A checksum-valid 12/13 digit code is a linear EAN-13/UPC-A scan and
  is not searched for AIs
- Variable-length AIs end at FNC1 (ASCII 29) or at their maximum length
- Nothing raises: every problem becomes an invalid field or a warning,
  and a decode only succeeds when it found fields and recorded no warning
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

import structlog

from .ai_rules import AIRule, AIRuleTable, ValueType, get_rule_table
from .classifier import (
    SYMBOLOGY_PREFIXES,
    Symbology,
    classify_linear,
    infer_gs1_symbology,
    strip_symbology_identifier,
)
from .extractor import (
    DEFAULT_LOOP_LIMIT,
    ExtractedItem,
    is_bracketed,
    iter_bracketed,
    iter_stream,
)
from .issues import DecodeIssue, WarningCode
from ..validators.validators import (
    DEFAULT_CENTURY_PIVOT,
    ValidationResult,
    decode_gs1_date,
    decode_gs1_datetime,
    decode_weight,
    derive_product_code,
    expiry_window,
    validate_count,
    validate_gtin,
)

logger = structlog.get_logger()

GTIN_AIS = ('01', '02')
AI_GTIN = '01'
AI_EXPIRY = '17'
AI_PRODUCTION_DATE = '11'
AI_BATCH = '10'
AI_SERIAL = '21'


@dataclass(frozen=True)
class DecodeOptions:
    """
    Configuration options for decoding.

    Attributes:
        century_pivot: Two-digit years at or above the pivot are 19YY
        loop_limit: Maximum number of fields read from a raw stream
        datamatrix_length_threshold: Payloads longer than this (with GTIN
            plus batch/serial/expiry) are reported as GS1-DataMatrix
        symbology_prefixes: Symbology identifiers stripped before parsing
    """
    century_pivot: int = DEFAULT_CENTURY_PIVOT
    loop_limit: int = DEFAULT_LOOP_LIMIT
    datamatrix_length_threshold: int = 40
    symbology_prefixes: Tuple[str, ...] = SYMBOLOGY_PREFIXES


@dataclass(frozen=True)
class DecodedField:
    """
    A decoded AI field.

    Attributes:
        ai: Application Identifier code
        label: Human-readable label of the AI
        normalized_value: Normalised value (ISO date, scaled weight, ...)
            or the raw value when normalisation failed
        raw_value: Value exactly as scanned
        is_valid: Whether validation passed
    """
    ai: str
    label: str
    normalized_value: str
    raw_value: str
    is_valid: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ai': self.ai,
            'label': self.label,
            'normalized_value': self.normalized_value,
            'raw_value': self.raw_value,
            'is_valid': self.is_valid,
        }


@dataclass
class DecodeResult:
    """
    Complete result of decoding one scan.

    Attributes:
        success: True only if fields were found and no warning was recorded
        symbology: Detected (or inferred) symbology
        fields: Decoded fields keyed by literal AI code, in scan order
        gtin: Value of AI 01, valid or not
        expiry_date_iso: Valid AI 17 date as YYYY-MM-DD
        is_expired: True if the expiry date (end of day) has passed
        days_to_expiry: Days until expiry, rounded up
        batch_number: AI 10
        serial_number: AI 21
        production_date_iso: Valid AI 11 date as YYYY-MM-DD
        net_weight: First valid weight field, e.g. "15.00 kg"
        derived_product_code: Unverified NDC-like 5-4-2 regrouping of the GTIN
        warnings: Ordered warning messages
        issues: Structured form of ``warnings`` (same order)
        raw_input: Input exactly as received
        symbology_identifier: Stripped ]xx prefix, if any
    """
    raw_input: str
    success: bool = False
    symbology: Symbology = Symbology.UNKNOWN
    fields: Dict[str, DecodedField] = field(default_factory=dict)
    gtin: Optional[str] = None
    expiry_date_iso: Optional[str] = None
    is_expired: bool = False
    days_to_expiry: Optional[int] = None
    batch_number: Optional[str] = None
    serial_number: Optional[str] = None
    production_date_iso: Optional[str] = None
    net_weight: Optional[str] = None
    derived_product_code: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    issues: List[DecodeIssue] = field(default_factory=list)
    symbology_identifier: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'success': self.success,
            'symbology': self.symbology.value,
            'fields': {ai: f.to_dict() for ai, f in self.fields.items()},
            'gtin': self.gtin,
            'expiry_date_iso': self.expiry_date_iso,
            'is_expired': self.is_expired,
            'days_to_expiry': self.days_to_expiry,
            'batch_number': self.batch_number,
            'serial_number': self.serial_number,
            'production_date_iso': self.production_date_iso,
            'net_weight': self.net_weight,
            'derived_product_code': self.derived_product_code,
            'warnings': list(self.warnings),
            'issues': [i.to_dict() for i in self.issues],
            'raw_input': self.raw_input,
            'symbology_identifier': self.symbology_identifier,
        }


class GS1Decoder:
    """
    Scan decoder.

    Holds only read-only configuration, so one instance may be shared
    between threads; all per-scan state lives in local variables.
    """

    def __init__(
        self,
        options: Optional[DecodeOptions] = None,
        rule_table: Optional[AIRuleTable] = None,
    ):
        self.options = options or DecodeOptions()
        self.rules = rule_table or get_rule_table()

    def _validate_value(self, rule: AIRule, value: str) -> ValidationResult:
        """Normalise and validate one value according to its AI rule."""
        if rule.value_type == ValueType.DATE:
            return decode_gs1_date(value, self.options.century_pivot)
        if rule.value_type == ValueType.DATETIME:
            return decode_gs1_datetime(value, self.options.century_pivot)
        if rule.value_type == ValueType.WEIGHT:
            return decode_weight(value, rule.decimal_places or 0, rule.unit)
        if rule.value_type == ValueType.NUMBER:
            return validate_count(value)
        if rule.code in GTIN_AIS:
            return validate_gtin(value)
        return ValidationResult(valid=True, value=value)

    def _decode_field(
        self,
        rule: AIRule,
        value: str,
    ) -> Tuple[DecodedField, List[DecodeIssue]]:
        """Validate an extracted value and collect the warnings it raises."""
        issues: List[DecodeIssue] = []
        validation = self._validate_value(rule, value)
        is_valid = validation.valid

        length_ok = (
            len(value) == rule.fixed_length if rule.is_fixed
            else len(value) <= rule.max_length
        )
        if not length_ok:
            is_valid = False
            issues.append(DecodeIssue(
                WarningCode.INVALID_LENGTH,
                f"Invalid length for AI ({rule.code}): {len(value)}",
                ai=rule.code,
            ))

        if not validation.valid:
            if rule.code in GTIN_AIS:
                issues.append(DecodeIssue(
                    WarningCode.INVALID_CHECK_DIGIT,
                    f"Invalid Check Digit for AI ({rule.code})",
                    ai=rule.code,
                ))
            elif rule.value_type in (ValueType.DATE, ValueType.DATETIME):
                issues.append(DecodeIssue(
                    WarningCode.INVALID_DATE,
                    f"Invalid date for AI ({rule.code}): {value}",
                    ai=rule.code,
                ))
            else:
                issues.append(DecodeIssue(
                    WarningCode.INVALID_FORMAT,
                    f"Invalid value for AI ({rule.code}): {value}",
                    ai=rule.code,
                ))

        decoded = DecodedField(
            ai=rule.code,
            label=rule.label,
            normalized_value=validation.value if validation.valid else value,
            raw_value=value,
            is_valid=is_valid,
        )
        return decoded, issues

    def _collect(
        self,
        items: Iterable[ExtractedItem],
        result: DecodeResult,
    ) -> None:
        """Validate extracted items in order, filling fields and warnings."""
        for item in items:
            if isinstance(item, DecodeIssue):
                _add_issue(result, item)
                continue

            decoded, issues = self._decode_field(item.rule, item.raw_value)
            result.fields[decoded.ai] = decoded
            for issue in issues:
                _add_issue(result, issue)

    def _assemble(self, result: DecodeResult, data: str, now: datetime) -> None:
        """Derive the convenience attributes and the final success state."""
        fields = result.fields

        gtin_field = fields.get(AI_GTIN)
        if gtin_field is not None:
            result.gtin = gtin_field.normalized_value
            result.derived_product_code = derive_product_code(result.gtin)

        expiry_field = fields.get(AI_EXPIRY)
        if expiry_field is not None and expiry_field.is_valid:
            result.expiry_date_iso = expiry_field.normalized_value
            result.is_expired, result.days_to_expiry = expiry_window(
                date.fromisoformat(result.expiry_date_iso), now
            )

        production_field = fields.get(AI_PRODUCTION_DATE)
        if production_field is not None and production_field.is_valid:
            result.production_date_iso = production_field.normalized_value

        if AI_BATCH in fields:
            result.batch_number = fields[AI_BATCH].normalized_value
        if AI_SERIAL in fields:
            result.serial_number = fields[AI_SERIAL].normalized_value

        for ai, decoded in fields.items():
            rule = self.rules.get(ai)
            if rule is not None and rule.value_type == ValueType.WEIGHT and decoded.is_valid:
                result.net_weight = decoded.normalized_value
                break

        result.symbology = infer_gs1_symbology(
            data,
            has_gtin=result.gtin is not None,
            has_lot_serial_or_expiry=bool(
                result.batch_number or result.serial_number or result.expiry_date_iso
            ),
            datamatrix_threshold=self.options.datamatrix_length_threshold,
        )
        result.success = bool(fields) and not result.warnings

    def decode(self, raw: str, now: Optional[datetime] = None) -> DecodeResult:
        """
        Decode a scanned string.

        Args:
            raw: Scanned barcode data
            now: Reference time for expiry checks (defaults to local now;
                aware values are converted to local time)

        Returns:
            DecodeResult; never raises for string input
        """
        if not isinstance(raw, str):
            raise TypeError(f"Scan input must be str, got {type(raw).__name__}")

        now = now or datetime.now()
        result = DecodeResult(raw_input=raw)

        data, identifier = strip_symbology_identifier(
            raw.strip(), self.options.symbology_prefixes
        )
        result.symbology_identifier = identifier

        if not data:
            _add_issue(result, DecodeIssue(
                WarningCode.UNKNOWN_FORMAT, "Unknown format: empty input"
            ))
            logger.debug("gs1_decode_finished", success=False, reason="empty")
            return result

        linear = classify_linear(data)
        if linear is not None:
            symbology, padded = linear
            result.symbology = symbology
            result.gtin = padded
            result.fields[AI_GTIN] = DecodedField(
                ai=AI_GTIN,
                label="GTIN",
                normalized_value=padded,
                raw_value=data,
                is_valid=True,
            )
            result.success = True
            logger.debug("gs1_decode_finished", success=True, symbology=symbology.value)
            return result

        if is_bracketed(data):
            items = iter_bracketed(data, self.rules)
        else:
            items = iter_stream(data, self.rules, self.options.loop_limit)

        self._collect(items, result)
        self._assemble(result, data, now)

        logger.debug(
            "gs1_decode_finished",
            success=result.success,
            symbology=result.symbology.value,
            fields=list(result.fields),
            warnings=len(result.warnings),
        )
        return result


def _add_issue(result: DecodeResult, issue: DecodeIssue) -> None:
    result.issues.append(issue)
    result.warnings.append(issue.message)


_DEFAULT_DECODER = GS1Decoder()


def _get_decoder(options: Optional[DecodeOptions]) -> GS1Decoder:
    if options is None:
        return _DEFAULT_DECODER
    return GS1Decoder(options)


def decode_gs1(
    raw: str,
    *,
    options: Optional[DecodeOptions] = None,
    now: Optional[datetime] = None,
) -> DecodeResult:
    """
    Decode a scanned barcode string.

    Main entry point for the decoder.

    Args:
        raw: Bracketed GS1 text, raw FNC1 stream (optionally prefixed
            with ]d2, ]Q3 or ]C1), or a 12-13 digit linear barcode
        options: Optional decoding configuration
        now: Reference time for expiry checks

    Returns:
        DecodeResult with fields, derived attributes and warnings

    Examples:
        >>> result = decode_gs1("(01)12345678901231(17)241231(10)LOT99")
        >>> result.gtin
        '12345678901231'
        >>> result.expiry_date_iso
        '2024-12-31'
    """
    return _get_decoder(options).decode(raw, now=now)
