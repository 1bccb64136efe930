"""
Version Panel

Shows the latest version and dependency maps of the selected packages.
"""

from typing import Any

from ..models import PackageRecord
from ..notifications import Notifier
from ..packages.npm_client import NPMClient
from .base import ComparisonPanel


class VersionPanel(ComparisonPanel):
    """Version and dependency insights."""

    dimension = "version"
    title = "Version & Dependency Insights"

    def __init__(self, client: NPMClient, notifier: Notifier):
        super().__init__(notifier)
        self.client = client

    async def fetch(self, record: PackageRecord) -> PackageRecord:
        manifest = await self.client.get_manifest(record.name)
        return record.with_updates(
            version=manifest.version,
            dependencies=manifest.dependencies,
            peer_dependencies=manifest.peer_dependencies,
        )

    def chart_data(self) -> dict[str, Any]:
        records = self.records
        return {
            "title": self.title,
            "labels": self.labels,
            "datasets": [
                {
                    "label": "Dependencies",
                    "data": [len(r.dependencies or {}) for r in records],
                },
                {
                    "label": "Peer Dependencies",
                    "data": [len(r.peer_dependencies or {}) for r in records],
                },
            ],
        }

    def cards(self) -> list[dict[str, Any]]:
        cards = []
        for r in self.records:
            cards.append({
                "name": r.name,
                "version": r.version,
                "dependencies": [f"{name}: {version_range}" for name, version_range in (r.dependencies or {}).items()],
                "peer_dependencies": [f"{name}: {version_range}" for name, version_range in (r.peer_dependencies or {}).items()],
            })
        return cards
