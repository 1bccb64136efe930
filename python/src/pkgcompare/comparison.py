"""
Package Comparison

Wires the selection to the three comparison panels and builds the overview cards.
"""

import asyncio
from typing import Any

import httpx

from .config import CompareConfig, compare_logger
from .models import PackageRecord
from .notifications import Notifier
from .packages.bundle_client import BundleSizeClient
from .packages.downloads_client import DownloadsClient
from .packages.npm_client import NPMClient
from .panels import ComparisonPanel, DownloadsPanel, SizePanel, VersionPanel
from .selection import PackageSelector, SelectionManager


class PackageComparison:
    """Side-by-side comparison of the selected packages."""

    def __init__(self, config: CompareConfig | None = None,
                 http_client: httpx.AsyncClient | None = None,
                 selection: SelectionManager | None = None,
                 notifier: Notifier | None = None):
        """
        Initialize the comparison.

        Args:
            config: Provider configuration
            http_client: Session shared by all upstream clients (each client opens its own if not provided)
            selection: Existing selection to observe
            notifier: Destination for failure notifications
        """
        self.config = config or CompareConfig()
        self.notifier = notifier or Notifier()
        self.selection = selection or SelectionManager()

        self.npm_client = NPMClient(self.config, http_client)
        self.downloads_client = DownloadsClient(self.config, http_client)
        self.bundle_client = BundleSizeClient(self.config, http_client)

        self.selector = PackageSelector(self.selection, self.npm_client, self.notifier)
        self.size_panel = SizePanel(self.bundle_client, self.notifier)
        self.version_panel = VersionPanel(self.npm_client, self.notifier)
        self.downloads_panel = DownloadsPanel(self.downloads_client, self.notifier)

        for panel in self.panels:
            self.selection.subscribe(panel.on_selection_change)

    @property
    def panels(self) -> list[ComparisonPanel]:
        return [self.size_panel, self.version_panel, self.downloads_panel]

    @property
    def search(self):
        return self.selector.search

    @property
    def loading(self) -> bool:
        return any(panel.loading for panel in self.panels)

    async def select(self, package_name: str) -> PackageRecord | None:
        return await self.selector.select(package_name)

    def remove(self, package_name: str) -> bool:
        return self.selector.remove(package_name)

    async def wait_idle(self):
        """Wait until every panel has settled its scheduled batches."""
        await asyncio.gather(*(panel.wait_idle() for panel in self.panels))

    async def refresh_all(self, force: bool = False):
        """Refresh every panel for the current selection."""
        records = self.selection.records
        await asyncio.gather(*(panel.refresh(records, force=force) for panel in self.panels))

    def overview_cards(self) -> list[dict[str, Any]]:
        """Summary card per selected package, built from the registry base fields."""
        preview = self.config.keyword_preview
        cards = []
        for record in self.selection:
            keywords = record.keywords[:preview]
            overflow = len(record.keywords) - len(keywords)
            cards.append({
                "name": record.name,
                "version": f"v{record.version}",
                "author": record.display_author,
                "description": record.description,
                "license": record.display_license,
                "repository": record.repository or None,
                "keywords": keywords,
                "more_keywords": f"+{overflow}" if overflow > 0 else None,
                "created": record.created_at.date().isoformat() if record.created_at else None,
                "updated": record.modified_at.date().isoformat() if record.modified_at else None,
            })
        return cards

    async def aclose(self):
        """Unsubscribe the panels and close any sessions the clients opened."""
        for panel in self.panels:
            self.selection.unsubscribe(panel.on_selection_change)
        await self.wait_idle()
        await asyncio.gather(
            self.npm_client.aclose(),
            self.downloads_client.aclose(),
            self.bundle_client.aclose()
        )
        compare_logger.debug("Package comparison closed")
