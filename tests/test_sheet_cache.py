"""
Tests for the customer sheet snapshot cache
"""

import httpx
import pytest

from order_report_proxy.core.config import CustomerSheetSettings
from order_report_proxy.domains.customers import CustomerSheetCache

from .conftest import SHEET_CSV, SHEET_URL


def cache_with(handler, **settings):
    sheet_settings = CustomerSheetSettings(CUSTOMER_SHEET_CSV_URL=SHEET_URL, **settings)
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CustomerSheetCache(sheet_settings, client)


class TestCustomerSheetSettings:
    def test_export_url_from_sheet_id(self):
        settings = CustomerSheetSettings(GOOGLE_SHEET_ID="abc123", GOOGLE_SHEET_GID="7")
        assert settings.csv_url == (
            "https://docs.google.com/spreadsheets/d/abc123/export?format=csv&gid=7"
        )

    def test_explicit_url_wins(self):
        settings = CustomerSheetSettings(
            GOOGLE_SHEET_ID="abc123", CUSTOMER_SHEET_CSV_URL="https://x.test/a.csv"
        )
        assert settings.csv_url == "https://x.test/a.csv"

    def test_unconfigured(self):
        assert CustomerSheetSettings(GOOGLE_SHEET_ID="").csv_url is None


class TestCustomerSheetCache:
    @pytest.mark.asyncio
    async def test_refresh_loads_snapshot(self, sheet_cache):
        assert sheet_cache.snapshot().count == 0

        snapshot = await sheet_cache.refresh()

        assert snapshot.count == 2
        assert snapshot.refreshed_at is not None
        assert snapshot.source_url == SHEET_URL
        assert sheet_cache.snapshot() is snapshot
        assert sheet_cache.lookup("#1001")["email"] == "jane.sheet@example.com"
        assert sheet_cache.lookup(1001)["first_name"] == "Jane"
        assert sheet_cache.lookup("9999") is None
        assert sheet_cache.lookup(None) is None

    @pytest.mark.asyncio
    async def test_refresh_swaps_whole_snapshot(self, sheet_cache):
        first = await sheet_cache.refresh()
        second = await sheet_cache.refresh()

        assert first is not second
        # A reader holding the old snapshot keeps a complete view
        assert first.count == 2
        assert second.count == 2

    @pytest.mark.asyncio
    async def test_snapshot_is_read_only(self, sheet_cache):
        snapshot = await sheet_cache.refresh()

        with pytest.raises(TypeError):
            snapshot.entries["1234"] = {}
        with pytest.raises(TypeError):
            snapshot.entries["1001"]["email"] = "changed@example.com"

    @pytest.mark.asyncio
    async def test_http_error_gives_empty_snapshot(self):
        cache = cache_with(lambda request: httpx.Response(500, text="oops"))

        snapshot = await cache.refresh()

        assert snapshot.count == 0
        assert snapshot.refreshed_at is not None

    @pytest.mark.asyncio
    async def test_network_error_gives_empty_snapshot(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        cache = cache_with(handler)
        assert (await cache.refresh()).count == 0

    @pytest.mark.asyncio
    async def test_empty_payload_replaces_previous_data(self):
        payloads = [SHEET_CSV, ""]

        def handler(request):
            return httpx.Response(200, text=payloads.pop(0))

        cache = cache_with(handler)
        assert (await cache.refresh()).count == 2
        assert (await cache.refresh()).count == 0
        assert cache.lookup("1001") is None

    @pytest.mark.asyncio
    async def test_unconfigured_sheet_is_empty(self, empty_sheet_cache):
        snapshot = await empty_sheet_cache.refresh()

        assert snapshot.count == 0
        assert empty_sheet_cache.stats()["configured"] is False

    @pytest.mark.asyncio
    async def test_stats(self, sheet_cache):
        await sheet_cache.refresh()
        stats = sheet_cache.stats()

        assert stats["configured"] is True
        assert stats["count"] == 2
        assert stats["last_refreshed"].endswith("+00:00")

    @pytest.mark.asyncio
    async def test_periodic_refresh_disabled_by_default(self, sheet_cache):
        assert sheet_cache.start_periodic_refresh() is None

    @pytest.mark.asyncio
    async def test_periodic_refresh_task_is_cancelled_on_close(self):
        cache = cache_with(
            lambda request: httpx.Response(200, text=SHEET_CSV),
            CUSTOMER_SHEET_REFRESH_INTERVAL_SECONDS=3600,
        )

        task = cache.start_periodic_refresh()
        assert task is not None
        assert cache.start_periodic_refresh() is task

        await cache.close()
        assert task.cancelled()
