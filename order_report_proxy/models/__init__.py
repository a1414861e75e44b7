"""
Request and response models for the Order Report Proxy API
"""

from .responses import (
    BaseResponse,
    ErrorResponse,
    OrdersResponse,
    OrderResponse,
    CustomerDataStats,
    HealthResponse,
    RefreshResponse,
    DebugOrderResponse,
    GraphQLRequest,
)

__all__ = [
    "BaseResponse",
    "ErrorResponse",
    "OrdersResponse",
    "OrderResponse",
    "CustomerDataStats",
    "HealthResponse",
    "RefreshResponse",
    "DebugOrderResponse",
    "GraphQLRequest",
]
