"""
Order endpoints: enriched order list and single order
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from order_report_proxy.core.logging import get_logger
from order_report_proxy.domains.orders import EnrichmentOptions, OrderEnrichmentService
from order_report_proxy.models import OrdersResponse, OrderResponse
from order_report_proxy.api.dependencies import (
    error_response,
    get_enrichment_service,
    parse_flag,
)

logger = get_logger(__name__)

router = APIRouter(tags=["orders"])


@router.get("/orders", response_model=OrdersResponse)
async def list_orders(
    limit: int = Query(default=250, description="Page size, capped at 250"),
    status: Optional[str] = Query(default="any"),
    financial_status: Optional[str] = Query(default=None),
    created_at_min: Optional[str] = Query(default=None),
    created_at_max: Optional[str] = Query(default=None),
    include_transactions: Optional[str] = Query(default="true"),
    include_skus: Optional[str] = Query(default="true"),
    service: OrderEnrichmentService = Depends(get_enrichment_service),
):
    """
    Get a page of orders with payment transactions and reconciled customer data
    """
    try:
        logger.info("Fetching orders", limit=limit, status=status)

        orders = await service.list_orders(
            limit=limit,
            status=status,
            financial_status=financial_status,
            created_at_min=created_at_min,
            created_at_max=created_at_max,
        )
        logger.info(f"Found {len(orders)} orders")

        options = EnrichmentOptions(
            include_transactions=parse_flag(include_transactions),
            resolve_skus=parse_flag(include_skus),
        )
        enriched = await service.enrich_orders(orders, options)
        logger.info("All orders enriched", count=len(enriched))

        return OrdersResponse(count=len(enriched), orders=enriched)

    except Exception as e:
        logger.error(f"Error in /orders endpoint: {str(e)}")
        return error_response(500, "Failed to fetch orders", str(e))


@router.get("/orders/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    service: OrderEnrichmentService = Depends(get_enrichment_service),
):
    """
    Get one order, always enriched with transactions
    """
    try:
        logger.info(f"Fetching order {order_id}")

        order = await service.get_order(order_id)
        if not order:
            return error_response(404, "Order not found")

        result = await service.enrich_order(order, EnrichmentOptions())
        return OrderResponse(order=result.order)

    except Exception as e:
        logger.error(f"Error fetching order {order_id}: {str(e)}")
        return error_response(500, "Failed to fetch order", str(e))
