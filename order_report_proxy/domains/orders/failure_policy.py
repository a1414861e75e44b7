"""
Declared failure policy for every upstream Shopify operation

List calls propagate (the request fails), single-record lookups degrade to
None and transaction lookups degrade to an empty list. Keeping the table in
one place makes the behaviour of each call site auditable.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

from order_report_proxy.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class UpstreamOperation(str, Enum):
    LIST_ORDERS = "list_orders"
    GET_ORDER = "get_order"
    GET_TRANSACTIONS = "get_transactions"
    GET_VARIANT = "get_variant"
    GRAPHQL = "graphql"


class FailurePolicy(str, Enum):
    PROPAGATE = "propagate"
    DEFAULT_TO_EMPTY = "default_to_empty"
    DEFAULT_TO_NULL = "default_to_null"


FAILURE_POLICIES: Dict[UpstreamOperation, FailurePolicy] = {
    UpstreamOperation.LIST_ORDERS: FailurePolicy.PROPAGATE,
    UpstreamOperation.GET_ORDER: FailurePolicy.DEFAULT_TO_NULL,
    UpstreamOperation.GET_TRANSACTIONS: FailurePolicy.DEFAULT_TO_EMPTY,
    UpstreamOperation.GET_VARIANT: FailurePolicy.DEFAULT_TO_NULL,
    UpstreamOperation.GRAPHQL: FailurePolicy.PROPAGATE,
}


@dataclass
class PolicyOutcome(Generic[T]):
    """Result of an upstream call after its failure policy was applied"""

    value: T
    error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def default_for(policy: FailurePolicy) -> Any:
    if policy == FailurePolicy.DEFAULT_TO_EMPTY:
        return []
    return None


async def run_with_policy(
    operation: UpstreamOperation,
    call: Callable[[], Awaitable[T]],
    context: Optional[Dict[str, Any]] = None,
) -> PolicyOutcome[T]:
    """Await an upstream call and apply the declared policy to any failure"""
    policy = FAILURE_POLICIES[operation]
    try:
        return PolicyOutcome(value=await call())
    except Exception as e:
        if policy == FailurePolicy.PROPAGATE:
            raise

        logger.error(
            f"Upstream {operation.value} failed, using default",
            policy=policy.value,
            error=str(e),
            error_type=type(e).__name__,
            **(context or {}),
        )
        return PolicyOutcome(value=default_for(policy), error=e)
