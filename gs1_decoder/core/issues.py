"""
Warning codes and structured warnings recorded while decoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class WarningCode(str, Enum):
    """Warning codes."""
    INVALID_CHECK_DIGIT = "INVALID_CHECK_DIGIT"
    INVALID_DATE = "INVALID_DATE"
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_LENGTH = "INVALID_LENGTH"
    TRUNCATED_FIELD = "TRUNCATED_FIELD"
    UNKNOWN_AI = "UNKNOWN_AI"
    UNKNOWN_FORMAT = "UNKNOWN_FORMAT"
    UNPARSED_TRAILING_DATA = "UNPARSED_TRAILING_DATA"


@dataclass(frozen=True)
class DecodeIssue:
    """A warning recorded during decoding."""
    code: WarningCode
    message: str
    ai: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'code': self.code.value,
            'message': self.message,
            'ai': self.ai,
        }
