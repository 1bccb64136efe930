"""
Downloads Panel

Compares weekly, monthly and total downloads of the selected packages.
"""

from typing import Any

from ..models import PackageRecord
from ..notifications import Notifier
from ..packages.downloads_client import DownloadsClient
from .base import ComparisonPanel
from .formatting import format_compact, format_count


class DownloadsPanel(ComparisonPanel):
    """Download trends."""

    dimension = "download"
    title = "Download Statistics"

    def __init__(self, client: DownloadsClient, notifier: Notifier):
        super().__init__(notifier)
        self.client = client

    async def fetch(self, record: PackageRecord) -> PackageRecord:
        downloads = await self.client.get_downloads(record.name)
        return record.with_updates(downloads=downloads)

    def chart_data(self, compact: bool = False) -> dict[str, Any]:
        records = self.records
        series = [
            ("Weekly Downloads", "weekly"),
            ("Monthly Downloads", "monthly"),
            ("Total Downloads", "total"),
        ]
        datasets = []
        for label, attr in series:
            datasets.append({
                "label": label,
                "data": [getattr(r.downloads, attr) if r.downloads else 0 for r in records],
            })

        peak = max((value for ds in datasets for value in ds["data"]), default=0)
        return {
            "title": self.title,
            "labels": self.labels,
            "y_axis": "Downloads",
            "y_max_label": format_compact(peak) if compact else format_count(peak),
            "datasets": datasets,
        }

    def cards(self) -> list[dict[str, Any]]:
        return [
            {
                "name": r.name,
                "weekly": format_count(r.downloads.weekly if r.downloads else 0),
                "monthly": format_count(r.downloads.monthly if r.downloads else 0),
                "total": format_count(r.downloads.total if r.downloads else 0),
            }
            for r in self.records
        ]
