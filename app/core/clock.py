"""
UTC time helpers.

All stored timestamps are timezone-aware UTC. Some database drivers (SQLite)
hand values back without tzinfo, so comparisons go through ``ensure_utc``.
"""

import datetime
from typing import Optional


def utcnow() -> datetime.datetime:
    """Current time as an aware UTC datetime."""
    return datetime.datetime.now(datetime.timezone.utc)


def ensure_utc(value: Optional[datetime.datetime]) -> Optional[datetime.datetime]:
    """Attach UTC to naive values; aware values are converted to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)
