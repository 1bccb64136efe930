"""
Comparison Panel Base

Shared batch refresh logic for the size, version and downloads panels.
"""

import asyncio
from collections.abc import Iterable
from typing import Any

from ..config import compare_logger
from ..models import PackageRecord
from ..notifications import Notifier


class ComparisonPanel:
    """
    A panel that enriches its own copy of the selected packages with one dimension.

    Every selection change starts a batch. Packages already resolved for the same
    cache key are reused, the rest are fetched concurrently and each failure only
    affects its own package. A batch that settles after a newer one has started
    is discarded.
    """

    dimension = "package"
    title = ""

    def __init__(self, notifier: Notifier):
        self.notifier = notifier
        self.loading = False
        self._selection: tuple[PackageRecord, ...] = ()
        self._resolved: dict[str, PackageRecord] = {}
        self._batch_seq = 0
        self._tasks: set[asyncio.Task] = set()

    def cache_key(self, record: PackageRecord) -> str:
        return record.name

    async def fetch(self, record: PackageRecord) -> PackageRecord:
        """Return an enriched copy of one record. Subclasses implement the upstream call."""
        raise NotImplementedError

    def on_selection_change(self, records: Iterable[PackageRecord]):
        """Selection listener: schedule a refresh for the new selection."""
        self._selection = tuple(records)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            compare_logger.debug(f"No running loop, {self.dimension} panel refresh deferred")
            return

        task = loop.create_task(self.refresh())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def wait_idle(self):
        """Wait for every scheduled refresh to settle."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def refresh(self, records: Iterable[PackageRecord] | None = None,
                      force: bool = False) -> list[PackageRecord]:
        """Run one batch for the current selection and return the enriched records."""
        if records is not None:
            self._selection = tuple(records)
        selection = self._selection

        self._batch_seq += 1
        batch_seq = self._batch_seq

        pending = [
            record for record in selection
            if force or self.cache_key(record) not in self._resolved
        ]

        self.loading = True
        try:
            results = await asyncio.gather(
                *(self.fetch(record) for record in pending),
                return_exceptions=True
            )
        finally:
            if batch_seq == self._batch_seq:
                self.loading = False

        if batch_seq != self._batch_seq:
            compare_logger.debug(f"Discarding stale {self.dimension} batch {batch_seq}")
            return self.records

        for record, result in zip(pending, results):
            key = self.cache_key(record)
            if isinstance(result, BaseException):
                self._resolved.pop(key, None)
                self._report_failure(record, result)
            else:
                self._resolved[key] = result

        live_keys = {self.cache_key(record) for record in selection}
        self._resolved = {k: v for k, v in self._resolved.items() if k in live_keys}

        return self.records

    def _report_failure(self, record: PackageRecord, error: BaseException):
        compare_logger.error(f"Error fetching {self.dimension} data for {record.name}: {error}")
        self.notifier.error(
            f"Failed to fetch {self.dimension} data for {record.name}",
            package=record.name,
            dimension=self.dimension
        )

    @property
    def records(self) -> list[PackageRecord]:
        """The panel's copy of the selection, enriched where a fetch succeeded."""
        return [self._resolved.get(self.cache_key(r), r) for r in self._selection]

    @property
    def labels(self) -> list[str]:
        return [r.name for r in self._selection]

    def chart_data(self) -> dict[str, Any]:
        return {"title": self.title, "labels": self.labels, "datasets": []}

    def cards(self) -> list[dict[str, Any]]:
        return [{"name": r.name, "version": r.version} for r in self.records]
