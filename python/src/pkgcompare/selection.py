"""
Package Selection

This module owns the ordered set of selected packages and the flow that adds to it.
"""

from collections.abc import Callable

from .config import compare_logger
from .errors import PackageFetchError
from .models import PackageRecord
from .notifications import Notifier
from .packages.npm_client import NPMClient
from .packages.search import SuggestionSearch

SelectionListener = Callable[[tuple[PackageRecord, ...]], None]


class SelectionManager:
    """Single source of truth for the selected packages, in selection order."""

    def __init__(self):
        self._records: list[PackageRecord] = []
        self._listeners: list[SelectionListener] = []

    def subscribe(self, listener: SelectionListener):
        """Register a consumer notified with a snapshot after every change."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: SelectionListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def add(self, record: PackageRecord) -> bool:
        """Append a package. Adding a name that is already selected is a no-op."""
        if record.name in self:
            compare_logger.debug(f"Package already selected: {record.name}")
            return False

        self._records.append(record)
        compare_logger.info(f"Selected package {record.name}@{record.version}")
        self._notify()
        return True

    def remove(self, name: str) -> bool:
        """Remove a package by name, keeping the order of the rest."""
        remaining = [r for r in self._records if r.name != name]
        if len(remaining) == len(self._records):
            return False

        self._records = remaining
        compare_logger.info(f"Removed package {name}")
        self._notify()
        return True

    @property
    def records(self) -> tuple[PackageRecord, ...]:
        return tuple(self._records)

    @property
    def names(self) -> list[str]:
        return [r.name for r in self._records]

    def get(self, name: str) -> PackageRecord | None:
        for record in self._records:
            if record.name == name:
                return record
        return None

    def __contains__(self, name: object) -> bool:
        return any(r.name == name for r in self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self.records)

    def _notify(self):
        snapshot = self.records
        for listener in list(self._listeners):
            listener(snapshot)


class PackageSelector:
    """Turns a picked search suggestion into a selected package."""

    def __init__(self, selection: SelectionManager, client: NPMClient,
                 notifier: Notifier, search: SuggestionSearch | None = None):
        self.selection = selection
        self.client = client
        self.notifier = notifier
        self.search = search or SuggestionSearch(client, notifier)

    async def select(self, package_name: str) -> PackageRecord | None:
        """Fetch a package's metadata and add it to the selection. Returns None if nothing was added."""
        if package_name in self.selection:
            compare_logger.debug(f"Package already selected: {package_name}")
            self.search.clear()
            return None

        try:
            record = await self.client.get_package(package_name)
        except PackageFetchError as e:
            compare_logger.error(f"Error fetching package {package_name}: {e}")
            self.notifier.error(f"Failed to fetch package {package_name}",
                                package=package_name, dimension="package")
            return None

        added = self.selection.add(record)
        self.search.clear()
        return record if added else None

    def remove(self, package_name: str) -> bool:
        return self.selection.remove(package_name)
