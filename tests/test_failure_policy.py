"""
Tests for the declared upstream failure policies
"""

import pytest

from order_report_proxy.core.exceptions import ShopifyAPIError
from order_report_proxy.domains.orders import (
    FAILURE_POLICIES,
    FailurePolicy,
    UpstreamOperation,
    run_with_policy,
)


async def failing():
    raise ShopifyAPIError("upstream down", status_code=502)


async def succeeding():
    return {"ok": True}


class TestFailurePolicies:
    def test_every_operation_has_a_policy(self):
        assert set(FAILURE_POLICIES) == set(UpstreamOperation)

    def test_declared_policies(self):
        assert FAILURE_POLICIES[UpstreamOperation.LIST_ORDERS] == FailurePolicy.PROPAGATE
        assert FAILURE_POLICIES[UpstreamOperation.GET_ORDER] == FailurePolicy.DEFAULT_TO_NULL
        assert FAILURE_POLICIES[UpstreamOperation.GET_VARIANT] == FailurePolicy.DEFAULT_TO_NULL
        assert (
            FAILURE_POLICIES[UpstreamOperation.GET_TRANSACTIONS]
            == FailurePolicy.DEFAULT_TO_EMPTY
        )
        assert FAILURE_POLICIES[UpstreamOperation.GRAPHQL] == FailurePolicy.PROPAGATE

    @pytest.mark.asyncio
    async def test_success_passes_value_through(self):
        outcome = await run_with_policy(UpstreamOperation.GET_ORDER, succeeding)

        assert outcome.value == {"ok": True}
        assert not outcome.failed

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "operation", [UpstreamOperation.LIST_ORDERS, UpstreamOperation.GRAPHQL]
    )
    async def test_propagate(self, operation):
        with pytest.raises(ShopifyAPIError):
            await run_with_policy(operation, failing)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "operation", [UpstreamOperation.GET_ORDER, UpstreamOperation.GET_VARIANT]
    )
    async def test_default_to_null(self, operation):
        outcome = await run_with_policy(operation, failing, {"order_id": 1})

        assert outcome.value is None
        assert outcome.failed
        assert isinstance(outcome.error, ShopifyAPIError)

    @pytest.mark.asyncio
    async def test_default_to_empty(self):
        outcome = await run_with_policy(UpstreamOperation.GET_TRANSACTIONS, failing)

        assert outcome.value == []
        assert outcome.failed
