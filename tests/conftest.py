"""
Shared fixtures for the Order Report Proxy test suite
"""

import asyncio
from typing import Any, Dict, List, Optional

import httpx
import pytest

from order_report_proxy.core.config import (
    CustomerSheetSettings,
    EnrichmentSettings,
    ShopifySettings,
)
from order_report_proxy.core.exceptions import ShopifyAPIError
from order_report_proxy.domains.customers import CustomerSheetCache
from order_report_proxy.domains.orders import OrderEnrichmentService

SHEET_URL = "https://sheets.example.test/export?format=csv"

SHEET_CSV = (
    "Order Number,First Name,Last Name,Email,Phone,Address,City,Country\n"
    '#1001,Jane,Doe,jane.sheet@example.com,+15550001,"12 Main St, Apt 4",Springfield,US\n'
    "Order 1002,,Smithers,,,,,\n"
)


class RecordingSleep:
    """Stand-in for asyncio.sleep that records delays and never waits"""

    def __init__(self, events: Optional[List[Any]] = None):
        self.delays: List[float] = []
        self.events = events if events is not None else []

    async def __call__(self, delay: float):
        self.delays.append(delay)
        self.events.append(("sleep", delay))
        await asyncio.sleep(0)


class FakeOrderClient:
    """In-memory replacement for OrderAPIClient"""

    def __init__(
        self,
        orders: Optional[List[Dict[str, Any]]] = None,
        transactions: Optional[Dict[Any, List[Dict[str, Any]]]] = None,
        variants: Optional[Dict[Any, Dict[str, Any]]] = None,
        events: Optional[List[Any]] = None,
    ):
        self.orders = orders or []
        self.transactions = transactions or {}
        self.variants = variants or {}
        self.events = events if events is not None else []
        self.failing_transactions = set()
        self.failing_variants = set()
        self.list_error: Optional[Exception] = None
        self.order_error: Optional[Exception] = None
        self.graphql_response: Dict[str, Any] = {"data": {}}
        self.graphql_calls: List[Any] = []
        self.list_calls: List[Dict[str, Any]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def list_orders(self, **filters):
        self.list_calls.append(filters)
        if self.list_error:
            raise self.list_error
        return [dict(order) for order in self.orders]

    async def get_order(self, order_id):
        if self.order_error:
            raise self.order_error
        for order in self.orders:
            if str(order["id"]) == str(order_id):
                return dict(order)
        raise ShopifyAPIError("Not Found", status_code=404)

    async def get_transactions(self, order_id):
        self.events.append(("transactions", order_id))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if order_id in self.failing_transactions:
                raise ShopifyAPIError("Internal Server Error", status_code=500)
            return self.transactions.get(order_id, [])
        finally:
            self.in_flight -= 1

    async def get_variant(self, variant_id):
        self.events.append(("variant", variant_id))
        if variant_id in self.failing_variants:
            raise ShopifyAPIError("Internal Server Error", status_code=500)
        return self.variants.get(variant_id)

    async def graphql(self, query, variables=None):
        self.graphql_calls.append((query, variables))
        return self.graphql_response


def make_order(order_id: int, order_number: int, **overrides) -> Dict[str, Any]:
    order = {
        "id": order_id,
        "order_number": order_number,
        "name": f"#{order_number}",
        "financial_status": "paid",
        "email": None,
        "contact_email": None,
        "phone": None,
        "customer": None,
        "shipping_address": None,
        "billing_address": None,
        "line_items": [],
    }
    order.update(overrides)
    return order


@pytest.fixture
def shopify_settings():
    return ShopifySettings(
        SHOPIFY_STORE_DOMAIN="test-store.myshopify.com",
        SHOPIFY_ACCESS_TOKEN="shpat_test_token",
    )


@pytest.fixture
def enrichment_settings():
    return EnrichmentSettings(RATE_LIMIT_INITIAL_DELAY_SECONDS=0.0)


@pytest.fixture
def sheet_settings():
    return CustomerSheetSettings(CUSTOMER_SHEET_CSV_URL=SHEET_URL)


@pytest.fixture
def events():
    return []


@pytest.fixture
def recording_sleep(events):
    return RecordingSleep(events)


@pytest.fixture
def guest_order():
    """Guest checkout: no customer object, contact data only on the addresses"""
    return make_order(
        1,
        1001,
        email="guest@example.com",
        shipping_address={
            "first_name": "Janet",
            "last_name": "Doe",
            "address1": "1 Shopify Way",
            "city": "Ottawa",
            "country": "CA",
            "phone": "+15559999",
        },
        billing_address={"first_name": "Billing", "last_name": "Person"},
        line_items=[
            {"id": 11, "title": "Shampoo", "sku": "SH-1", "variant_id": 101},
            {"id": 12, "title": "Conditioner", "sku": "", "variant_id": 102},
        ],
    )


@pytest.fixture
def customer_order():
    return make_order(
        2,
        1002,
        email="order@example.com",
        customer={
            "id": 555,
            "email": "customer@example.com",
            "first_name": "John",
            "last_name": "Smith",
            "phone": "+15551111",
            "accepts_marketing": True,
            "default_address": {"address1": "9 Default Rd", "city": "Toronto"},
        },
    )


@pytest.fixture
def sheet_transport():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=SHEET_CSV)

    return httpx.MockTransport(handler)


@pytest.fixture
def sheet_cache(sheet_settings, sheet_transport):
    return CustomerSheetCache(
        sheet_settings, httpx.AsyncClient(transport=sheet_transport)
    )


@pytest.fixture
def empty_sheet_cache():
    return CustomerSheetCache(CustomerSheetSettings())


@pytest.fixture
def fake_client(guest_order, customer_order, events):
    return FakeOrderClient(
        orders=[guest_order, customer_order],
        transactions={
            1: [
                {
                    "id": 9001,
                    "order_id": 1,
                    "kind": "sale",
                    "gateway": "stripe",
                    "status": "success",
                    "amount": "42.00",
                    "currency": "USD",
                    "authorization": "ch_123",
                    "receipt": {"charge_id": "ch_123"},
                    "created_at": "2024-05-01T10:00:00Z",
                    "test": False,
                }
            ]
        },
        variants={102: {"id": 102, "sku": "CO-2", "barcode": "0123456789"}},
        events=events,
    )


@pytest.fixture
def enrichment_service(fake_client, empty_sheet_cache, recording_sleep):
    return OrderEnrichmentService(
        fake_client, empty_sheet_cache, batch_size=5, batch_delay=0.1, sleep=recording_sleep
    )
