"""
Order enrichment pipeline

Each order passes through a fixed sequence of stages:

1. reconcile - attach normalized customer/address data (never fails)
2. resolve_skus - fill missing line item SKU/barcode from the variant record
3. attach_transactions - attach the payment transactions of the order

Stages take and return an EnrichmentResult and do not raise; failures that a
stage recovers from are recorded on the result. Anything unexpected falls
back to the order as it was before the remote stages ran.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from order_report_proxy.core.logging import get_logger
from order_report_proxy.domains.customers import CustomerSheetCache, SheetSnapshot
from order_report_proxy.domains.shopify.services import OrderAPIClient
from .failure_policy import UpstreamOperation, run_with_policy
from .reconciler import (
    reconcile_customer,
    reconcile_shipping_address,
    has_address_data,
)

logger = get_logger(__name__)

TRANSACTION_FIELDS = (
    "id",
    "authorization",
    "gateway",
    "kind",
    "status",
    "amount",
    "currency",
    "receipt",
    "created_at",
)


class EnrichmentStatus(str, Enum):
    ENRICHED = "enriched"
    ENRICHED_WITH_PARTIAL_FAILURE = "enriched_with_partial_failure"


@dataclass
class EnrichmentOptions:
    include_transactions: bool = True
    resolve_skus: bool = True

    @property
    def needs_remote_calls(self) -> bool:
        return self.include_transactions or self.resolve_skus


@dataclass
class EnrichmentResult:
    order: Dict[str, Any]
    failures: List[str] = field(default_factory=list)

    @property
    def status(self) -> EnrichmentStatus:
        if self.failures:
            return EnrichmentStatus.ENRICHED_WITH_PARTIAL_FAILURE
        return EnrichmentStatus.ENRICHED


Stage = Callable[[EnrichmentResult], Awaitable[EnrichmentResult]]


def order_label(order: Dict[str, Any]) -> Any:
    return order.get("order_number") or order.get("name") or order.get("id")


def normalize_transaction(transaction: Dict[str, Any]) -> Dict[str, Any]:
    """Strip a Shopify transaction down to the fields we re-serve"""
    return {key: transaction.get(key) for key in TRANSACTION_FIELDS}


class OrderEnrichmentService:
    """Fetches orders from Shopify and runs them through the enrichment stages"""

    def __init__(
        self,
        client: OrderAPIClient,
        sheet_cache: CustomerSheetCache,
        batch_size: int = 5,
        batch_delay: float = 0.1,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    ):
        self.client = client
        self.sheet_cache = sheet_cache
        self.batch_size = max(1, batch_size)
        self.batch_delay = batch_delay
        self._sleep = sleep or asyncio.sleep

    # ------------------------------------------------------------------
    # Upstream lookups with their declared failure policies
    # ------------------------------------------------------------------

    async def list_orders(self, **filters) -> List[Dict[str, Any]]:
        outcome = await run_with_policy(
            UpstreamOperation.LIST_ORDERS, lambda: self.client.list_orders(**filters)
        )
        return outcome.value

    async def get_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        outcome = await run_with_policy(
            UpstreamOperation.GET_ORDER,
            lambda: self.client.get_order(order_id),
            {"order_id": order_id},
        )
        return outcome.value

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def reconcile(
        self, order: Dict[str, Any], snapshot: Optional[SheetSnapshot] = None
    ) -> EnrichmentResult:
        """Attach normalized customer and address data"""
        snapshot = snapshot or self.sheet_cache.snapshot()
        sheet_entry = snapshot.get(order.get("order_number") or order.get("name"))

        customer_info = reconcile_customer(order, sheet_entry)
        address_info = reconcile_shipping_address(order, sheet_entry)

        if not customer_info["full_name"] and not customer_info["email"]:
            logger.warning(f"Order {order_label(order)} has no customer data")

        enriched = dict(order)
        enriched["customer"] = order.get("customer") or customer_info
        enriched["customer_info"] = customer_info
        enriched["shipping_address"] = order.get("shipping_address") or (
            address_info if has_address_data(address_info) else None
        )
        enriched["shipping_address_info"] = address_info
        enriched["billing_address"] = order.get("billing_address") or None
        enriched["customer_data_source"] = "spreadsheet" if sheet_entry else "shopify"
        return EnrichmentResult(order=enriched)

    async def resolve_skus(self, result: EnrichmentResult) -> EnrichmentResult:
        """Fill in sku/barcode for line items that lack a SKU, one variant at a time"""
        line_items = result.order.get("line_items") or []
        resolved = []

        for item in line_items:
            item = dict(item)
            variant_id = item.get("variant_id")
            if not item.get("sku") and variant_id:
                outcome = await run_with_policy(
                    UpstreamOperation.GET_VARIANT,
                    lambda: self.client.get_variant(variant_id),
                    {"variant_id": variant_id},
                )
                variant = outcome.value
                if variant:
                    item["sku"] = variant.get("sku") or item.get("sku")
                    item["barcode"] = variant.get("barcode")
                else:
                    result.failures.append(f"variant {variant_id} unavailable")
            resolved.append(item)

        if line_items:
            result.order["line_items"] = resolved
        return result

    async def attach_transactions(self, result: EnrichmentResult) -> EnrichmentResult:
        """Attach the normalized transaction list of the order"""
        order_id = result.order.get("id")
        outcome = await run_with_policy(
            UpstreamOperation.GET_TRANSACTIONS,
            lambda: self.client.get_transactions(order_id),
            {"order_id": order_id},
        )
        if outcome.failed:
            result.failures.append(f"transactions for order {order_id} unavailable")

        result.order["transactions"] = [
            normalize_transaction(transaction) for transaction in outcome.value or []
        ]
        return result

    def _remote_stages(self, options: EnrichmentOptions) -> List[Stage]:
        stages: List[Stage] = []
        if options.resolve_skus:
            stages.append(self.resolve_skus)
        if options.include_transactions:
            stages.append(self.attach_transactions)
        return stages

    async def _run_stages(
        self, result: EnrichmentResult, stages: List[Stage], fallback: Dict[str, Any]
    ) -> EnrichmentResult:
        try:
            for stage in stages:
                result = await stage(result)
        except Exception as e:
            logger.error(
                f"Error enriching order {order_label(fallback)}: {e}",
                error_type=type(e).__name__,
            )
            return EnrichmentResult(order=fallback, failures=[str(e)])

        if result.failures:
            logger.warning(
                f"Order {order_label(result.order)} enriched with partial failures",
                failures=result.failures,
            )
        return result

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    async def enrich_order(
        self,
        order: Dict[str, Any],
        options: Optional[EnrichmentOptions] = None,
        snapshot: Optional[SheetSnapshot] = None,
    ) -> EnrichmentResult:
        """Run every requested stage for one order; never raises"""
        options = options or EnrichmentOptions()
        try:
            result = self.reconcile(order, snapshot)
        except Exception as e:
            logger.error(f"Error enriching order {order_label(order)}: {e}")
            return EnrichmentResult(order=order, failures=[str(e)])

        return await self._run_stages(result, self._remote_stages(options), order)

    async def enrich_orders(
        self,
        orders: List[Dict[str, Any]],
        options: Optional[EnrichmentOptions] = None,
    ) -> List[Dict[str, Any]]:
        """
        Enrich a page of orders

        Customer data is reconciled for every order. Remote stages run in
        fixed-size batches; orders inside a batch are processed concurrently
        and a fixed delay separates consecutive batches to stay under the
        Shopify rate limit. Output order matches input order.
        """
        options = options or EnrichmentOptions()
        snapshot = self.sheet_cache.snapshot()

        reconciled: List[EnrichmentResult] = []
        for order in orders:
            try:
                reconciled.append(self.reconcile(order, snapshot))
            except Exception as e:
                logger.error(f"Error enriching order {order_label(order)}: {e}")
                reconciled.append(EnrichmentResult(order=order, failures=[str(e)]))

        if not options.needs_remote_calls:
            return [result.order for result in reconciled]
        stages = self._remote_stages(options)

        enriched: List[Dict[str, Any]] = []

        if not options.include_transactions:
            # Variant lookups only, sequentially
            for result in reconciled:
                result = await self._run_stages(result, stages, dict(result.order))
                enriched.append(result.order)
            return enriched

        batches = [
            reconciled[i : i + self.batch_size]
            for i in range(0, len(reconciled), self.batch_size)
        ]
        logger.info(
            "Enriching orders with transaction details",
            orders=len(reconciled),
            batches=len(batches),
            batch_size=self.batch_size,
        )

        for index, batch in enumerate(batches):
            results = await asyncio.gather(
                *(
                    self._run_stages(result, stages, dict(result.order))
                    for result in batch
                )
            )
            enriched.extend(result.order for result in results)

            if index < len(batches) - 1:
                await self._sleep(self.batch_delay)

        return enriched
