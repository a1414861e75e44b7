"""
Debug endpoint: raw Shopify order data for troubleshooting missing customer fields
"""

from fastapi import APIRouter, Depends

from order_report_proxy.core.logging import get_logger
from order_report_proxy.domains.customers import (
    CustomerSheetCache,
    normalize_order_number,
)
from order_report_proxy.domains.orders import (
    OrderEnrichmentService,
    reconcile_customer,
    reconcile_shipping_address,
)
from order_report_proxy.models import DebugOrderResponse
from order_report_proxy.api.dependencies import (
    error_response,
    get_enrichment_service,
    get_sheet_cache,
)

logger = get_logger(__name__)
router = APIRouter(tags=["debug"])


@router.get("/debug/order/{order_id}", response_model=DebugOrderResponse)
async def debug_order(
    order_id: str,
    service: OrderEnrichmentService = Depends(get_enrichment_service),
    sheet_cache: CustomerSheetCache = Depends(get_sheet_cache),
):
    """Return the raw order with presence flags for every customer data source"""
    try:
        logger.info(f"DEBUG: Fetching raw order {order_id}")

        order = await service.get_order(order_id)
        if not order:
            return error_response(404, "Order not found")

        order_number = order.get("order_number") or order.get("name")
        sheet_entry = sheet_cache.lookup(order_number)

        debug_info = {
            "has_customer": bool(order.get("customer")),
            "has_shipping_address": bool(order.get("shipping_address")),
            "has_billing_address": bool(order.get("billing_address")),
            "customer_fields": {
                "customer_object": order.get("customer"),
                "email": order.get("email"),
                "contact_email": order.get("contact_email"),
                "phone": order.get("phone"),
            },
            "shipping_address": order.get("shipping_address"),
            "billing_address": order.get("billing_address"),
            "normalized_order_number": normalize_order_number(order_number),
            "in_customer_sheet": sheet_entry is not None,
            "sheet_entry": dict(sheet_entry) if sheet_entry is not None else None,
            "customer_info": reconcile_customer(order, sheet_entry),
            "shipping_address_info": reconcile_shipping_address(order, sheet_entry),
        }

        return DebugOrderResponse(debug_info=debug_info, raw_order=order)

    except Exception as e:
        logger.error(f"DEBUG Error: {str(e)}")
        return error_response(500, "Failed to fetch order", str(e))
