"""
Order Report Proxy - Shopify order enrichment proxy
"""

__version__ = "1.0.0"
