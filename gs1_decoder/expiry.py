"""
Expiry helpers for decoded scans.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta

from .core.decoder import DecodeResult


class ExpiryTier(str, Enum):
    """Expiry bands used by the expiry management screen."""
    EXPIRED = "EXPIRED"
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    WATCH = "WATCH"
    GOOD = "GOOD"
    UNKNOWN = "UNKNOWN"


CRITICAL_DAYS = 30
WARNING_DAYS = 60
WATCH_DAYS = 90


def expiry_status(
    result: DecodeResult,
    near_months: int = 6,
    *,
    today: Optional[date] = None,
) -> str:
    """
    Returns: Valid, Near Expiry, Expired, Unknown
    """
    if not result.expiry_date_iso:
        return "Unknown"
    expiry = date.fromisoformat(result.expiry_date_iso)
    today = today or date.today()
    if expiry < today:
        return "Expired"
    if expiry <= today + relativedelta(months=near_months):
        return "Near Expiry"
    return "Valid"


def expiry_tier(days_to_expiry: Optional[int]) -> ExpiryTier:
    if days_to_expiry is None:
        return ExpiryTier.UNKNOWN
    if days_to_expiry < 0:
        return ExpiryTier.EXPIRED
    if days_to_expiry <= CRITICAL_DAYS:
        return ExpiryTier.CRITICAL
    if days_to_expiry <= WARNING_DAYS:
        return ExpiryTier.WARNING
    if days_to_expiry <= WATCH_DAYS:
        return ExpiryTier.WATCH
    return ExpiryTier.GOOD


def is_near_expiry(result: DecodeResult, days: int = 30) -> bool:
    """Point-of-sale flag: not yet expired but expiring within ``days``."""
    if result.is_expired or result.days_to_expiry is None:
        return False
    return result.days_to_expiry < days
