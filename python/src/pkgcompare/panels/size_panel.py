"""
Size Panel

Compares minified, gzipped and dependency sizes of the selected packages.
"""

from typing import Any

from ..config import compare_logger
from ..errors import PackageCompareError
from ..models import PackageRecord
from ..notifications import Notifier
from ..packages.bundle_client import BundleSizeClient
from .base import ComparisonPanel
from .formatting import format_kb


class SizePanel(ComparisonPanel):
    """Package size analysis."""

    dimension = "size"
    title = "Package Size Comparison"

    def __init__(self, client: BundleSizeClient, notifier: Notifier):
        super().__init__(notifier)
        self.client = client
        self.in_flight: set[str] = set()

    def cache_key(self, record: PackageRecord) -> str:
        return f"{record.name}@{record.version}"

    async def fetch(self, record: PackageRecord) -> PackageRecord:
        size = await self.client.get_size(record.name, record.version)
        return record.with_updates(size=size)

    async def refetch(self, package_name: str) -> bool:
        """
        Re-fetch one package's size on demand.

        Returns False without requesting anything when the package is not selected
        or a re-fetch for it is already in flight.
        """
        if package_name in self.in_flight:
            compare_logger.debug(f"Size re-fetch already in flight for {package_name}")
            return False

        record = next((r for r in self._selection if r.name == package_name), None)
        if record is None:
            return False

        self.in_flight.add(package_name)
        try:
            enriched = await self.fetch(record)
        except PackageCompareError as e:
            self._report_failure(record, e)
            return True
        finally:
            self.in_flight.discard(package_name)

        # The package may have been removed while the request was running
        if any(self.cache_key(r) == self.cache_key(record) for r in self._selection):
            self._resolved[self.cache_key(record)] = enriched
        return True

    def chart_data(self) -> dict[str, Any]:
        records = self.records
        return {
            "title": self.title,
            "labels": self.labels,
            "y_axis": "Size (KB)",
            "datasets": [
                {
                    "label": "Minified Size (KB)",
                    "data": [(r.size.minified if r.size else 0) / 1024 for r in records],
                },
                {
                    "label": "Gzipped Size (KB)",
                    "data": [(r.size.gzip if r.size else 0) / 1024 for r in records],
                },
            ],
        }

    def cards(self) -> list[dict[str, Any]]:
        cards = []
        for r in self.records:
            cards.append({
                "name": r.name,
                "version": r.version,
                "minified": format_kb(r.size.minified if r.size else 0),
                "gzipped": format_kb(r.size.gzip if r.size else 0),
                "total_with_dependencies": format_kb(r.size.total if r.size else 0),
                "refreshing": r.name in self.in_flight,
            })
        return cards
