"""
Bundle Size Client

Fetches minified, gzip and dependency sizes from the bundle analysis API.
"""

import logging

from pydantic import BaseModel, Field, ValidationError

from ..errors import FetchError
from ..models import SizeInfo
from .base import UpstreamClient

logger = logging.getLogger(__name__)


class DependencySize(BaseModel):
    name: str = ""
    approximateSize: int = Field(default=0, description="Approximate size in bytes")


class BundleSizeResponse(BaseModel):
    """Response of the bundle size endpoint."""

    size: int = Field(description="Minified size in bytes")
    gzip: int = Field(description="Minified and gzipped size in bytes")
    dependencySizes: list[DependencySize] = Field(description="Per-dependency approximate sizes")

    @property
    def dependency_total(self) -> int:
        return sum(dep.approximateSize for dep in self.dependencySizes)


class BundleSizeClient(UpstreamClient):
    """Client for the bundle size analysis API."""

    @property
    def size_url(self) -> str:
        return f"{self.config.bundle_url}/api/size"

    async def get_size(self, package_name: str, version: str) -> SizeInfo:
        """Get the size footprint of one exact package version."""
        url = self.size_url
        data = await self._get_json(url, params={"package": f"{package_name}@{version}"})

        try:
            parsed = BundleSizeResponse.model_validate(data)
        except ValidationError as e:
            raise FetchError(url, f"Malformed size response for {package_name}@{version}") from e

        logger.debug(f"Size data for {package_name}@{version}: {parsed.size} bytes minified")
        return SizeInfo(
            minified=parsed.size,
            gzip=parsed.gzip,
            total=parsed.dependency_total,
        )
