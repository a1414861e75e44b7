"""
Customer sheet cache endpoints
"""

from fastapi import APIRouter, Depends

from order_report_proxy.core.logging import get_logger
from order_report_proxy.domains.customers import CustomerSheetCache
from order_report_proxy.models import RefreshResponse
from order_report_proxy.shared.helpers import isoformat_or_none
from order_report_proxy.api.dependencies import error_response, get_sheet_cache

logger = get_logger(__name__)
router = APIRouter(tags=["customer-data"])


@router.post("/refresh-customer-data", response_model=RefreshResponse)
async def refresh_customer_data(
    sheet_cache: CustomerSheetCache = Depends(get_sheet_cache),
):
    """Re-download the customer sheet and replace the cached snapshot"""
    try:
        logger.info("Manual customer sheet refresh requested")
        snapshot = await sheet_cache.refresh()

        return RefreshResponse(
            message=f"Customer data refreshed: {snapshot.count} records loaded",
            count=snapshot.count,
            last_refreshed=isoformat_or_none(snapshot.refreshed_at),
        )
    except Exception as e:
        logger.error(f"Customer data refresh failed: {str(e)}")
        return error_response(500, "Failed to refresh customer data", str(e))
