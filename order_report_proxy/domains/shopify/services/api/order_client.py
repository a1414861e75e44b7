"""
Shopify Order API client: orders, transactions, variants and GraphQL pass-through
"""

from typing import Dict, Any, Optional, List

import httpx

from order_report_proxy.core.config import ShopifySettings, EnrichmentSettings
from order_report_proxy.core.logging import get_logger
from order_report_proxy.shared.decorators import async_rate_limit_retry
from .base_client import BaseShopifyAPIClient

logger = get_logger(__name__)


class OrderAPIClient(BaseShopifyAPIClient):
    """Shopify order, transaction and variant endpoints"""

    def __init__(
        self,
        shopify_settings: ShopifySettings,
        enrichment_settings: Optional[EnrichmentSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(shopify_settings, http_client)
        enrichment_settings = enrichment_settings or EnrichmentSettings()
        self.max_retries = enrichment_settings.RATE_LIMIT_MAX_RETRIES
        self.initial_retry_delay = enrichment_settings.RATE_LIMIT_INITIAL_DELAY_SECONDS

    async def list_orders(
        self,
        limit: int = 250,
        status: Optional[str] = "any",
        financial_status: Optional[str] = None,
        created_at_min: Optional[str] = None,
        created_at_max: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Get one page of orders. Fields are not restricted so customer data is included"""
        page_ceiling = self.settings.SHOPIFY_PAGE_SIZE_LIMIT
        params: Dict[str, Any] = {
            "limit": max(1, min(limit, page_ceiling)),
            "status": status or "any",
        }
        if financial_status:
            params["financial_status"] = financial_status
        if created_at_min:
            params["created_at_min"] = created_at_min
        if created_at_max:
            params["created_at_max"] = created_at_max

        data = await self._request("GET", "orders.json", params=params)
        return data.get("orders", [])

    async def get_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        """Get a single order by id"""
        data = await self._request("GET", f"orders/{order_id}.json")
        return data.get("order")

    @async_rate_limit_retry()
    async def get_transactions(self, order_id: Any) -> List[Dict[str, Any]]:
        """Get the payment transactions of an order, backing off on rate limits"""
        data = await self._request("GET", f"orders/{order_id}/transactions.json")
        return data.get("transactions", [])

    async def get_variant(self, variant_id: Any) -> Optional[Dict[str, Any]]:
        """Get a product variant (sku, barcode) by id"""
        data = await self._request("GET", f"variants/{variant_id}.json")
        return data.get("variant")

    async def graphql(
        self, query: Optional[str], variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Forward a GraphQL query verbatim and return the raw response body"""
        return await self._request(
            "POST", "graphql.json", json={"query": query, "variables": variables}
        )
