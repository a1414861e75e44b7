"""
Configuration module for the Order Report Proxy
"""

from .settings import settings, Settings
from .settings import (
    ShopifySettings,
    CustomerSheetSettings,
    EnrichmentSettings,
    LoggingSettings,
)

__all__ = [
    "settings",
    "Settings",
    "ShopifySettings",
    "CustomerSheetSettings",
    "EnrichmentSettings",
    "LoggingSettings",
]
