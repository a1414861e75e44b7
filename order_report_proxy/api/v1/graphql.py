"""
GraphQL pass-through to the Shopify Admin API
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from order_report_proxy.core.logging import get_logger
from order_report_proxy.domains.orders import UpstreamOperation, run_with_policy
from order_report_proxy.domains.shopify.services import OrderAPIClient
from order_report_proxy.models import GraphQLRequest
from order_report_proxy.api.dependencies import error_response, get_order_client

logger = get_logger(__name__)
router = APIRouter(tags=["graphql"])


@router.post("/graphql")
async def graphql_proxy(
    body: GraphQLRequest,
    client: OrderAPIClient = Depends(get_order_client),
):
    """Forward {query, variables} and return Shopify's response unmodified"""
    try:
        outcome = await run_with_policy(
            UpstreamOperation.GRAPHQL,
            lambda: client.graphql(body.query, body.variables),
        )
        return JSONResponse(content=outcome.value)

    except Exception as e:
        logger.error(f"GraphQL Error: {str(e)}")
        return error_response(500, "GraphQL query failed", str(e))
