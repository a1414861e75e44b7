"""
Shopify API clients package
"""

from .base_client import BaseShopifyAPIClient
from .order_client import OrderAPIClient

__all__ = [
    "BaseShopifyAPIClient",
    "OrderAPIClient",
]
