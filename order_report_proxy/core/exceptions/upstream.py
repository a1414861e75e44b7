"""
Exceptions raised while talking to upstream services (Shopify, the customer sheet)
"""

from typing import Optional, Any

from .base import OrderReportProxyException


class ShopifyAPIError(OrderReportProxyException):
    """Raised when the Shopify Admin API answers with a non-success status"""

    error_code = "SHOPIFY_API_ERROR"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Any = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            {"status_code": status_code, "response_body": response_body},
            cause,
        )
        self.status_code = status_code
        self.response_body = response_body

    def __str__(self) -> str:
        # Surfaced verbatim as the "message" of 500 responses
        return self.message


class ShopifyRateLimitError(ShopifyAPIError):
    """Raised on HTTP 429 from Shopify"""

    error_code = "SHOPIFY_RATE_LIMITED"

    def __init__(
        self,
        message: str = "Shopify rate limit exceeded",
        retry_after: Optional[float] = None,
        response_body: Any = None,
    ):
        super().__init__(message, 429, response_body)
        self.retry_after = retry_after


class CustomerSheetError(OrderReportProxyException):
    """Raised when the customer spreadsheet export cannot be fetched"""

    error_code = "CUSTOMER_SHEET_ERROR"

    def __init__(
        self,
        message: str,
        source_url: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, {"source_url": source_url}, cause)
        self.source_url = source_url
