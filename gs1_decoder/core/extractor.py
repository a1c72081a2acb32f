"""
Field extraction for GS1 element strings.

Two input shapes are supported:
- Human-readable bracketed form: (01)12345678901231(17)241231
- Raw concatenated stream where variable-length fields are terminated
  by FNC1 (transmitted as <GS>, ASCII 29)

Both extractors are generators yielding ExtractedValue and DecodeIssue
items in input order, so warnings keep their position relative to the
fields they concern.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

import structlog

from .ai_rules import AIRule, AIRuleTable
from .issues import DecodeIssue, WarningCode

logger = structlog.get_logger()

FNC1 = '\x1d'

BRACKET_PATTERN = re.compile(r'\(([0-9]+)\)([^(]+)')

DEFAULT_LOOP_LIMIT = 50

# Length of the stream excerpt quoted in an unknown-format warning
UNKNOWN_EXCERPT_LENGTH = 10


@dataclass(frozen=True)
class ExtractedValue:
    """An AI located in the input together with its raw value."""
    rule: AIRule
    raw_value: str
    start_index: int = 0
    end_index: int = 0


ExtractedItem = Union[ExtractedValue, DecodeIssue]


def is_bracketed(text: str) -> bool:
    """True when the input looks like the human-readable (AI)value form."""
    return '(' in text and ')' in text


def _no_match_issue(text: str, pos: int, extracted: int) -> DecodeIssue:
    rest = text[pos:]
    if extracted:
        return DecodeIssue(
            WarningCode.UNPARSED_TRAILING_DATA,
            f"Unparsed trailing data: {rest}",
        )
    return DecodeIssue(
        WarningCode.UNKNOWN_FORMAT,
        f"Unknown format or AI at: {rest[:UNKNOWN_EXCERPT_LENGTH]}",
    )


def iter_bracketed(text: str, table: AIRuleTable) -> Iterator[ExtractedItem]:
    """Extract (AI)value pairs from the human-readable bracketed form."""
    extracted = 0

    for match in BRACKET_PATTERN.finditer(text):
        ai = match.group(1)
        value = match.group(2).replace(FNC1, '')
        rule = table.get(ai)

        if rule is None:
            logger.debug("gs1_unknown_ai", ai=ai, form="bracketed")
            yield DecodeIssue(
                WarningCode.UNKNOWN_AI,
                f"Unknown AI ({ai}) in bracketed input",
                ai=ai,
            )
            continue

        extracted += 1
        yield ExtractedValue(
            rule=rule,
            raw_value=value,
            start_index=match.start(),
            end_index=match.end(),
        )

    if not extracted and not BRACKET_PATTERN.search(text):
        yield _no_match_issue(text, 0, 0)


def _take_value(
    rule: AIRule,
    text: str,
    pos: int,
) -> Optional[Tuple[str, int, bool]]:
    """
    Try to read the value of ``rule`` whose AI starts at ``pos``.

    Returns:
        (value, next_pos, truncated) or None if the AI cannot match here
    """
    data_start = pos + len(rule.code)

    if rule.is_fixed:
        data_end = data_start + rule.fixed_length
        if data_end > len(text):
            return None
        return text[data_start:data_end], data_end, False

    separator = text.find(FNC1, data_start)
    if separator != -1:
        value = text[data_start:separator]
        if not value:
            return None
        return value, separator + 1, False

    remaining = text[data_start:]
    if not remaining:
        return None
    if len(remaining) <= rule.max_length:
        return remaining, len(text), False

    # No separator: take up to the maximum length and keep going
    data_end = data_start + rule.max_length
    return text[data_start:data_end], data_end, True


def iter_stream(
    text: str,
    table: AIRuleTable,
    loop_limit: int = DEFAULT_LOOP_LIMIT,
) -> Iterator[ExtractedItem]:
    """
    Extract AI/value pairs from a raw FNC1-delimited stream.

    At each position every AI prefixing the stream is tried, longest
    code first; the first one able to take a value wins. Parsing stops
    at the first position where nothing matches, or after ``loop_limit``
    fields.
    """
    pos = 0
    iterations = 0

    while pos < len(text):
        # Separator at a field boundary (leading or after a fixed-length AI)
        if text[pos] == FNC1:
            pos += 1
            continue

        if iterations >= loop_limit:
            logger.debug("gs1_loop_limit_reached", limit=loop_limit, at_index=pos)
            yield _no_match_issue(text, pos, iterations)
            return
        iterations += 1

        taken = None
        for rule in table.find_matches(text, pos):
            taken = _take_value(rule, text, pos)
            if taken is not None:
                break

        if taken is None:
            logger.debug("gs1_no_ai_match", at_index=pos, extracted=iterations - 1)
            yield _no_match_issue(text, pos, iterations - 1)
            return

        value, next_pos, truncated = taken
        if truncated:
            yield DecodeIssue(
                WarningCode.TRUNCATED_FIELD,
                f"Variable length AI ({rule.code}) matched max length without "
                f"FNC1 separator. Check data integrity.",
                ai=rule.code,
            )

        yield ExtractedValue(
            rule=rule,
            raw_value=value,
            start_index=pos,
            end_index=next_pos,
        )
        pos = next_pos
