"""
Custom exceptions for the Order Report Proxy
"""

from .base import OrderReportProxyException
from .config import ConfigurationError, EnvironmentVariableError
from .upstream import ShopifyAPIError, ShopifyRateLimitError, CustomerSheetError

__all__ = [
    "OrderReportProxyException",
    "ConfigurationError",
    "EnvironmentVariableError",
    "ShopifyAPIError",
    "ShopifyRateLimitError",
    "CustomerSheetError",
]
