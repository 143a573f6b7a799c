"""
Time Utilities

Backend policy:
- Messages carry UTC-aware creation timestamps.
- The Redis hash stores `created` as decimal UNIX seconds.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

UTC = timezone.utc


def utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure a datetime is UTC-aware.

    - If `dt` is naive, treat it as UTC.
    - If `dt` is timezone-aware, convert it to UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_unix_seconds(dt: datetime) -> int:
    """Convert a datetime to whole UNIX seconds (naive input is treated as UTC)."""
    return int(ensure_utc(dt).timestamp())


def from_unix_seconds(value: int | str | bytes) -> datetime:
    """
    Parse decimal UNIX seconds into a UTC-aware datetime.

    Unparsable input maps to the epoch, which is always older than any TTL.
    """
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="replace")
    try:
        seconds = int(value)
    except (TypeError, ValueError):
        seconds = 0
    return datetime.fromtimestamp(seconds, UTC)
