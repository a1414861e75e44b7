"""
FastAPI dependencies and shared helpers for the route handlers

Services are created once in the application lifespan and stored on
``app.state``; handlers receive them through these dependencies so tests can
swap them with ``app.dependency_overrides``.
"""

from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from order_report_proxy.domains.customers import CustomerSheetCache
from order_report_proxy.domains.orders import OrderEnrichmentService
from order_report_proxy.domains.shopify.services import OrderAPIClient
from order_report_proxy.models import ErrorResponse

FALSE_FLAGS = {"false", "0", "no", "off"}


def get_enrichment_service(request: Request) -> OrderEnrichmentService:
    return request.app.state.enrichment_service


def get_sheet_cache(request: Request) -> CustomerSheetCache:
    return request.app.state.sheet_cache


def get_order_client(request: Request) -> OrderAPIClient:
    return request.app.state.order_client


def parse_flag(value: Optional[str], default: bool = True) -> bool:
    """Query-string boolean: only explicit false-like strings disable a flag"""
    if value is None or value == "":
        return default
    return value.strip().lower() not in FALSE_FLAGS


def error_response(
    status_code: int, error: str, message: Optional[str] = None
) -> JSONResponse:
    body = ErrorResponse(error=error, message=message).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)
