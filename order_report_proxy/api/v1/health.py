"""
Health check endpoint
"""

from fastapi import APIRouter, Depends

from order_report_proxy.core.config import settings
from order_report_proxy.core.logging import get_logger
from order_report_proxy.domains.customers import CustomerSheetCache
from order_report_proxy.models import CustomerDataStats, HealthResponse
from order_report_proxy.shared.helpers import now_utc
from order_report_proxy.api.dependencies import error_response, get_sheet_cache

logger = get_logger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(sheet_cache: CustomerSheetCache = Depends(get_sheet_cache)):
    """Service status with customer sheet cache statistics"""
    try:
        return HealthResponse(
            status="healthy",
            timestamp=now_utc().isoformat(),
            service=settings.PROJECT_NAME,
            version=settings.VERSION,
            customer_data=CustomerDataStats(**sheet_cache.stats()),
        )
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return error_response(500, "Health check failed", str(e))
