"""
Decorators module for the Order Report Proxy
"""

from .retry import async_rate_limit_retry, retry_on_rate_limit, is_rate_limited

__all__ = [
    "async_rate_limit_retry",
    "retry_on_rate_limit",
    "is_rate_limited",
]
