"""
Main application for the Order Report Proxy

Serves Shopify orders enriched with payment transactions and customer sheet
data behind the Shopify app proxy path.
"""

import sys
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from order_report_proxy.core.config import settings, Settings
from order_report_proxy.core.exceptions import ConfigurationError, OrderReportProxyException
from order_report_proxy.core.logging import get_logger, setup_logging, LoggingConfig
from order_report_proxy.domains.customers import CustomerSheetCache
from order_report_proxy.domains.orders import OrderEnrichmentService
from order_report_proxy.domains.shopify.services import OrderAPIClient
from order_report_proxy.api.dependencies import error_response
from order_report_proxy.api.v1 import router as v1_router

logger = get_logger(__name__)


async def initialize_services(app: FastAPI, config: Settings):
    """Create the shared HTTP client and services and store them on app.state"""
    shopify_http = httpx.AsyncClient(
        timeout=httpx.Timeout(config.shopify.SHOPIFY_REQUEST_TIMEOUT_SECONDS, connect=10.0),
        headers={"User-Agent": "OrderReportProxy/1.0"},
    )
    order_client = OrderAPIClient(config.shopify, config.enrichment, shopify_http)
    sheet_cache = CustomerSheetCache(config.customer_sheet)
    enrichment_service = OrderEnrichmentService(
        order_client,
        sheet_cache,
        batch_size=config.enrichment.TRANSACTION_BATCH_SIZE,
        batch_delay=config.enrichment.TRANSACTION_BATCH_DELAY_SECONDS,
    )

    app.state.shopify_http = shopify_http
    app.state.order_client = order_client
    app.state.sheet_cache = sheet_cache
    app.state.enrichment_service = enrichment_service

    # Best effort: an unreachable sheet leaves an empty cache
    try:
        snapshot = await sheet_cache.refresh()
        logger.info(f"Customer data loaded: {snapshot.count} records")
    except Exception as e:
        logger.error(f"Initial customer data load failed: {e}")

    sheet_cache.start_periodic_refresh()


async def cleanup_services(app: FastAPI):
    """Close the shared HTTP clients"""
    sheet_cache = getattr(app.state, "sheet_cache", None)
    if sheet_cache is not None:
        await sheet_cache.close()

    shopify_http = getattr(app.state, "shopify_http", None)
    if shopify_http is not None:
        await shopify_http.aclose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    settings.validate_configuration()
    setup_logging(LoggingConfig.from_settings(settings.logging))

    await initialize_services(app, settings)
    logger.info(
        f"Order Report Proxy ready on port {settings.PORT}",
        store=settings.shopify.SHOPIFY_STORE_DOMAIN,
        base_path=settings.API_BASE_PATH,
    )

    yield

    # Shutdown
    await cleanup_services(app)


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Shopify orders enriched with payment transactions and customer sheet data",
    version=settings.VERSION,
    lifespan=lifespan,
)

app.include_router(v1_router, prefix=settings.API_BASE_PATH)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX or None,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    """Malformed query or body: same error envelope as a failing handler"""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning("Rejected request", path=request.url.path, problems=problems)
    return error_response(500, "Invalid request", problems)


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler"""
    details = (
        exc.to_dict()
        if isinstance(exc, OrderReportProxyException)
        else {"exception_type": type(exc).__name__}
    )
    logger.error(f"Unhandled exception: {exc}", path=request.url.path, error=details)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "message": str(exc),
        },
    )


def run():
    """Console entry point: validate configuration, then serve"""
    try:
        settings.validate_configuration()
    except ConfigurationError as e:
        setup_logging(LoggingConfig.from_settings(settings.logging))
        logger.critical(f"Missing required configuration: {e.message}")
        sys.exit(1)

    uvicorn.run(
        "order_report_proxy.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info",
    )


if __name__ == "__main__":
    run()
