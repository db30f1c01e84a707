"""
Score helpers: clamping and time utilities used by several stages.
"""

from datetime import datetime, timezone
from typing import Optional


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def ensure_utc(dt: datetime) -> datetime:
    """Naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def days_since(dt: Optional[datetime], now: Optional[datetime] = None) -> float:
    """Fractional days between dt and now. Missing dates count as very old."""
    if dt is None:
        return 999.0
    now = ensure_utc(now) if now is not None else datetime.now(timezone.utc)
    return (now - ensure_utc(dt)).total_seconds() / 86400.0


def js_day_of_week(dt: datetime) -> int:
    """Day of week with Sunday=0 … Saturday=6 (weekend is 0 or 6)."""
    return (dt.weekday() + 1) % 7


def get_time_of_day(dt: datetime) -> str:
    """Coarse request time-of-day label: morning / afternoon / evening."""
    if dt.hour < 12:
        return "morning"
    if dt.hour < 17:
        return "afternoon"
    return "evening"
