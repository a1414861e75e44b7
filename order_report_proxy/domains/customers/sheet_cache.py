"""
In-memory customer sheet cache

The cache holds one immutable snapshot of the parsed sheet. A refresh builds a
complete new snapshot and swaps the single reference, so readers always see
either the old or the new mapping in full.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import httpx

from order_report_proxy.core.config import CustomerSheetSettings
from order_report_proxy.core.exceptions import CustomerSheetError
from order_report_proxy.core.logging import get_logger
from order_report_proxy.shared.helpers import now_utc, isoformat_or_none
from .csv_parser import SheetEntry, normalize_order_number, parse_customer_csv

logger = get_logger(__name__)


@dataclass(frozen=True)
class SheetSnapshot:
    """A complete, read-only view of the customer sheet at one refresh"""

    entries: Mapping[str, SheetEntry] = field(
        default_factory=lambda: MappingProxyType({})
    )
    refreshed_at: Optional[datetime] = None
    source_url: Optional[str] = None

    @classmethod
    def build(
        cls,
        entries: Dict[str, SheetEntry],
        refreshed_at: Optional[datetime] = None,
        source_url: Optional[str] = None,
    ) -> "SheetSnapshot":
        frozen = {key: MappingProxyType(dict(value)) for key, value in entries.items()}
        return cls(MappingProxyType(frozen), refreshed_at, source_url)

    @property
    def count(self) -> int:
        return len(self.entries)

    def get(self, order_number: Any) -> Optional[SheetEntry]:
        key = normalize_order_number(order_number)
        if not key:
            return None
        return self.entries.get(key)


class CustomerSheetCache:
    """Customer sheet snapshot holder with download/refresh"""

    def __init__(
        self,
        sheet_settings: CustomerSheetSettings,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = sheet_settings
        self.http_client = http_client
        self._owns_client = http_client is None
        self._snapshot = SheetSnapshot()
        self._refresh_task: Optional[asyncio.Task] = None

    @property
    def is_configured(self) -> bool:
        return self.settings.csv_url is not None

    def snapshot(self) -> SheetSnapshot:
        """The current snapshot; hold on to it for a consistent view"""
        return self._snapshot

    def lookup(self, order_number: Any) -> Optional[SheetEntry]:
        return self._snapshot.get(order_number)

    def stats(self) -> Dict[str, Any]:
        snapshot = self._snapshot
        return {
            "configured": self.is_configured,
            "count": snapshot.count,
            "last_refreshed": isoformat_or_none(snapshot.refreshed_at),
        }

    async def _download(self, url: str) -> str:
        if self.http_client is None:
            self.http_client = httpx.AsyncClient(
                timeout=self.settings.CUSTOMER_SHEET_TIMEOUT_SECONDS,
                follow_redirects=True,
            )
            self._owns_client = True

        try:
            response = await self.http_client.get(url, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise CustomerSheetError(
                f"Failed to download customer sheet: {e}", source_url=url, cause=e
            )

        text = response.text
        if not text or not text.strip():
            raise CustomerSheetError("Customer sheet export is empty", source_url=url)
        return text

    async def refresh(self) -> SheetSnapshot:
        """
        Re-download and re-parse the sheet, replacing the snapshot wholesale

        Never raises: any failure installs an empty snapshot and is only logged.
        """
        url = self.settings.csv_url
        if url is None:
            logger.info("No customer sheet configured, skipping refresh")
            self._snapshot = SheetSnapshot(refreshed_at=now_utc())
            return self._snapshot

        try:
            text = await self._download(url)
            entries = parse_customer_csv(text)
            snapshot = SheetSnapshot.build(entries, now_utc(), url)
            logger.info("Customer sheet refreshed", count=snapshot.count)
        except Exception as e:
            logger.error(f"Customer sheet refresh failed: {e}", source_url=url)
            snapshot = SheetSnapshot(refreshed_at=now_utc(), source_url=url)

        self._snapshot = snapshot
        return snapshot

    async def _refresh_forever(self, interval: float):
        while True:
            await asyncio.sleep(interval)
            await self.refresh()

    def start_periodic_refresh(self) -> Optional[asyncio.Task]:
        """Start the background refresh loop when an interval is configured"""
        interval = self.settings.CUSTOMER_SHEET_REFRESH_INTERVAL_SECONDS
        if interval <= 0 or not self.is_configured:
            return None
        if self._refresh_task is None or self._refresh_task.done():
            self._refresh_task = asyncio.create_task(self._refresh_forever(interval))
            logger.info("Periodic customer sheet refresh started", interval=interval)
        return self._refresh_task

    async def close(self):
        if self._refresh_task is not None:
            self._refresh_task.cancel()
            try:
                await self._refresh_task
            except asyncio.CancelledError:
                pass
            self._refresh_task = None

        if self.http_client is not None and self._owns_client:
            await self.http_client.aclose()
            self.http_client = None
