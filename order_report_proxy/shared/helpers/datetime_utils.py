"""
DateTime utility functions for the Order Report Proxy
"""

from datetime import datetime, timezone
from typing import Optional


def now_utc() -> datetime:
    """Get current UTC datetime"""
    return datetime.now(timezone.utc)


def isoformat_or_none(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 string for a datetime, None passes through"""
    if value is None:
        return None
    return value.isoformat()
