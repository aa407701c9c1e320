"""Timestamp parsing/formatting for the persisted note format.

Timestamps are stored the way JavaScript's `Date.toISOString()` writes them
(`2024-05-01T12:00:00.000Z`) so existing stores stay readable. Parsing is
best-effort and returns None instead of raising.
"""

from __future__ import annotations

from datetime import datetime, timezone
import re

from loguru import logger

# Fractional seconds of any length; fromisoformat on 3.10 wants 3 or 6 digits.
_FRACTION = re.compile(r"\.(\d+)")


def format_iso_utc(dt: datetime) -> str:
    """Format `dt` as UTC ISO-8601 with millisecond precision and `Z` suffix."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    utc = dt.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def parse_iso_utc(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], text, count=1)
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        logger.warning("Invalid timestamp: {}", value)
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def format_local_time(dt: datetime | None) -> str:
    """Format `dt` as local wall-clock time (HH:MM:SS); empty when None."""
    if dt is None:
        return ""
    try:
        return dt.astimezone().strftime("%H:%M:%S")
    except (ValueError, OverflowError):
        return ""


def format_local_datetime(dt: datetime | None) -> str:
    """Format `dt` as local date and time for note cards."""
    if dt is None:
        return ""
    try:
        return dt.astimezone().strftime("%Y-%m-%d %H:%M")
    except (ValueError, OverflowError):
        return ""
