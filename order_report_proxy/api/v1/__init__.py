"""
Version 1 routers, mounted under the app proxy base path
"""

from fastapi import APIRouter

from . import customer_data, debug, graphql, health, orders

router = APIRouter()
router.include_router(orders.router)
router.include_router(health.router)
router.include_router(customer_data.router)
router.include_router(debug.router)
router.include_router(graphql.router)

__all__ = ["router"]
