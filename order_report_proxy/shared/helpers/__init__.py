"""
Helpers module for the Order Report Proxy
"""

from .datetime_utils import (
    now_utc,
    isoformat_or_none,
)


__all__ = [
    "now_utc",
    "isoformat_or_none",
]
