"""
Response models for the Order Report Proxy API
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class BaseResponse(BaseModel):
    """Base response model"""

    success: bool = Field(..., description="Operation success status")


class ErrorResponse(BaseResponse):
    """Error response model"""

    success: bool = False
    error: str = Field(..., description="Error summary")
    message: Optional[str] = Field(None, description="Underlying failure message")


class OrdersResponse(BaseResponse):
    """Enriched page of orders"""

    success: bool = True
    count: int = Field(..., description="Number of orders returned")
    orders: List[Dict[str, Any]] = Field(..., description="Enriched orders")


class OrderResponse(BaseResponse):
    """Single enriched order"""

    success: bool = True
    order: Dict[str, Any] = Field(..., description="Enriched order")


class CustomerDataStats(BaseModel):
    """Customer sheet cache statistics"""

    configured: bool
    count: int
    last_refreshed: Optional[str] = None


class HealthResponse(BaseResponse):
    """Health check response model"""

    success: bool = True
    status: str
    timestamp: str
    service: Optional[str] = None
    version: Optional[str] = None
    customer_data: Optional[CustomerDataStats] = None


class RefreshResponse(BaseResponse):
    """Customer sheet refresh result"""

    success: bool = True
    message: str
    count: int
    last_refreshed: Optional[str] = None


class DebugOrderResponse(BaseResponse):
    """Raw order plus derived customer/address presence flags"""

    success: bool = True
    debug_info: Dict[str, Any]
    raw_order: Dict[str, Any]


class GraphQLRequest(BaseModel):
    """GraphQL pass-through request body"""

    query: Optional[str] = Field(None, description="GraphQL query document")
    variables: Optional[Dict[str, Any]] = Field(None, description="Query variables")
