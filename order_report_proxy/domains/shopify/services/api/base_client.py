"""
Base Shopify Admin REST API client with common functionality
"""

from typing import Dict, Any, Optional

import httpx

from order_report_proxy.core.config import ShopifySettings
from order_report_proxy.core.exceptions import ShopifyAPIError, ShopifyRateLimitError
from order_report_proxy.core.logging import get_logger

logger = get_logger(__name__)


class BaseShopifyAPIClient:
    """Base Shopify API client with common functionality"""

    def __init__(
        self,
        shopify_settings: ShopifySettings,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = shopify_settings
        self.base_url = shopify_settings.admin_api_url
        self.timeout = httpx.Timeout(
            shopify_settings.SHOPIFY_REQUEST_TIMEOUT_SECONDS, connect=10.0
        )

        # An injected client is owned by the caller and is not closed here
        self.http_client: Optional[httpx.AsyncClient] = http_client
        self._owns_client = http_client is None

    async def __aenter__(self):
        """Async context manager entry"""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

    async def connect(self):
        """Initialize HTTP client"""
        if self.http_client is None:
            self.http_client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": "OrderReportProxy/1.0"},
            )
            self._owns_client = True

    async def close(self):
        """Close HTTP client"""
        if self.http_client and self._owns_client:
            await self.http_client.aclose()
            self.http_client = None

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers with access token"""
        return {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": self.settings.SHOPIFY_ACCESS_TOKEN,
        }

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Issue one request against the Admin API and decode the JSON body"""
        await self.connect()

        response = await self.http_client.request(
            method,
            self._url(path),
            params=params,
            json=json,
            headers=self._get_headers(),
        )

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise ShopifyRateLimitError(
                retry_after=float(retry_after) if retry_after else None,
                response_body=self._safe_body(response),
            )

        if response.is_error:
            body = self._safe_body(response)
            logger.error(
                f"Shopify API error {response.status_code}",
                method=method,
                path=path,
                body=body,
            )
            raise ShopifyAPIError(
                f"Shopify API request failed with status {response.status_code}",
                status_code=response.status_code,
                response_body=body,
            )

        return response.json()

    @staticmethod
    def _safe_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text
