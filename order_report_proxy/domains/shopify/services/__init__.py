"""
Shopify domain services
"""

from .api import BaseShopifyAPIClient, OrderAPIClient

__all__ = [
    "BaseShopifyAPIClient",
    "OrderAPIClient",
]
