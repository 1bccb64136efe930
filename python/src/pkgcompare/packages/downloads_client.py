"""
Download Statistics Client

Fetches weekly, monthly and cumulative download counts from the npm downloads API.
"""

import asyncio
import logging
from datetime import date

from pydantic import BaseModel, Field, ValidationError

from ..errors import FetchError
from ..models import DownloadInfo
from .base import UpstreamClient

logger = logging.getLogger(__name__)


class DownloadPoint(BaseModel):
    """Response of a point (single figure) downloads query."""

    downloads: int = Field(default=0, description="Downloads in the period")
    start: str | None = None
    end: str | None = None
    package: str | None = None


class DownloadDay(BaseModel):
    downloads: int = 0
    day: str | None = None


class DownloadRange(BaseModel):
    """Response of a per-day range downloads query."""

    downloads: list[DownloadDay] = Field(default_factory=list, description="Per-day counts")
    start: str | None = None
    end: str | None = None
    package: str | None = None

    @property
    def total(self) -> int:
        return sum(day.downloads for day in self.downloads)


class DownloadsClient(UpstreamClient):
    """Client for the npm download statistics API."""

    def point_url(self, period: str, package_name: str) -> str:
        return f"{self.config.downloads_url}/downloads/point/{period}/{package_name}"

    def range_url(self, start: str, end: str, package_name: str) -> str:
        return f"{self.config.downloads_url}/downloads/range/{start}:{end}/{package_name}"

    async def get_point(self, period: str, package_name: str) -> int:
        """Get the download count for a named period such as last-week."""
        url = self.point_url(period, package_name)
        data = await self._get_json(url)
        return self._parse(url, DownloadPoint, data).downloads

    async def get_total(self, package_name: str, today: date | None = None) -> int:
        """Sum the per-day counts from the configured start date through today."""
        end = (today or date.today()).isoformat()
        url = self.range_url(self.config.downloads_start_date, end, package_name)
        data = await self._get_json(url)
        return self._parse(url, DownloadRange, data).total

    async def get_downloads(self, package_name: str) -> DownloadInfo:
        """Get weekly, monthly and total downloads for a package."""
        start_time = asyncio.get_running_loop().time()

        weekly, monthly, total = await asyncio.gather(
            self.get_point("last-week", package_name),
            self.get_point("last-month", package_name),
            self.get_total(package_name),
        )

        elapsed = (asyncio.get_running_loop().time() - start_time) * 1000
        logger.debug(f"Download data for {package_name}: weekly={weekly} monthly={monthly} total={total} ({elapsed:.0f}ms)")
        return DownloadInfo(weekly=weekly, monthly=monthly, total=total)

    def _parse(self, url: str, model: type[BaseModel], data) -> BaseModel:
        if not isinstance(data, dict):
            raise FetchError(url, "Downloads response is not an object")
        # Missing counts come back as null for brand new packages
        cleaned = {k: v for k, v in data.items() if v is not None}
        try:
            return model.model_validate(cleaned)
        except ValidationError as e:
            raise FetchError(url, f"Malformed downloads response: {e.error_count()} errors") from e
