"""
NPM Client for Package Comparison

This module provides npm registry search and package metadata lookups.
"""

import logging
import re
from datetime import datetime
from typing import Any
from urllib.parse import quote

from ..errors import FetchError, NotFoundError, PackageFetchError
from ..models import Maintainer, ManifestInfo, PackageRecord, SearchPage
from .base import UpstreamClient

logger = logging.getLogger(__name__)


class NPMClient(UpstreamClient):
    """Client for npm registry operations."""

    @property
    def search_url(self) -> str:
        return f"{self.config.registry_url}/-/v1/search"

    def package_url(self, package_name: str) -> str:
        # Scoped names keep their "@" but the separator must be encoded
        return f"{self.config.registry_url}/{quote(package_name, safe='@')}"

    def is_searchable(self, query: str) -> bool:
        """Check whether a query is long enough to hit the registry."""
        return len(query.strip()) >= self.config.min_query_length

    async def search_names(self, query: str, page: int = 1) -> SearchPage:
        """Search the registry for package names matching a query."""
        query = query.strip()
        if not self.is_searchable(query):
            return SearchPage(names=[], page=page, has_more=False)
        if page < 1:
            raise ValueError(f"page must be at least 1, got {page}")

        page_size = self.config.search_page_size
        params = {
            "text": query,
            "size": page_size,
            "from": (page - 1) * page_size,
        }
        data = await self._get_json(self.search_url, params=params)

        objects = data.get("objects") if isinstance(data, dict) else None
        if not isinstance(objects, list):
            raise FetchError(self.search_url, "Search response has no result list")

        names = []
        for item in objects:
            if not isinstance(item, dict):
                raise FetchError(self.search_url, "Malformed search response: result is not an object")
            name = self._object(self.search_url, item.get("package"), "package").get("name")
            if name and isinstance(name, str):
                names.append(name)

        return SearchPage(names=names, page=page, has_more=len(objects) == page_size)

    async def get_package(self, package_name: str) -> PackageRecord:
        """Get the base record for a package from its latest manifest."""
        url = self.package_url(package_name)
        try:
            data = await self._get_json(url)
            version, manifest = self._latest_manifest(package_name, data)
            time_data = self._object(url, data.get("time"), "time")
        except FetchError as e:
            logger.error(f"Error getting package info for {package_name}: {e}")
            raise PackageFetchError(package_name, "package", str(e)) from e

        return PackageRecord(
            name=package_name,
            version=version,
            description=manifest.get("description") or "",
            license=self._extract_license(manifest.get("license")),
            author=self._extract_author(manifest.get("author")),
            repository=self._extract_repository(manifest.get("repository")),
            keywords=[str(k) for k in manifest.get("keywords") or [] if k],
            maintainers=self._extract_maintainers(manifest.get("maintainers")),
            created_at=self._parse_time(time_data.get("created")),
            modified_at=self._parse_time(time_data.get("modified")),
        )

    async def get_manifest(self, package_name: str) -> ManifestInfo:
        """Get the latest version and its dependency maps."""
        url = self.package_url(package_name)
        data = await self._get_json(url)
        version, manifest = self._latest_manifest(package_name, data)

        return ManifestInfo(
            version=version,
            dependencies=dict(self._object(url, manifest.get("dependencies"), "dependencies")),
            peer_dependencies=dict(self._object(url, manifest.get("peerDependencies"), "peerDependencies")),
        )

    def _latest_manifest(self, package_name: str, data: Any) -> tuple[str, dict[str, Any]]:
        """Resolve the "latest" dist-tag and return it with its manifest."""
        url = self.package_url(package_name)
        if not isinstance(data, dict):
            raise FetchError(url, "Registry response is not an object")

        latest_version = self._object(url, data.get("dist-tags"), "dist-tags").get("latest")
        if not latest_version:
            raise NotFoundError(url, f"No latest version published for {package_name}")
        if not isinstance(latest_version, str):
            raise FetchError(url, "Latest dist-tag is not a version string")

        manifest = self._object(url, data.get("versions"), "versions").get(latest_version)
        if not isinstance(manifest, dict):
            raise NotFoundError(url, f"No manifest for {package_name}@{latest_version}")

        return latest_version, manifest

    def _object(self, url: str, value: Any, field_name: str) -> dict[str, Any]:
        """Return a nested JSON object, treating a missing value as empty."""
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise FetchError(url, f"Malformed registry response: {field_name} is not an object")
        return value

    def _extract_author(self, author_data: Any) -> str:
        """Extract author name from various author data formats."""
        if isinstance(author_data, str):
            return author_data
        elif isinstance(author_data, dict):
            return author_data.get("name") or ""
        return ""

    def _extract_repository(self, repo_data: Any) -> str:
        """Extract repository URL from various repository data formats."""
        url = repo_data
        if isinstance(repo_data, dict):
            url = repo_data.get("url")
        if url and isinstance(url, str):
            # Clean up git+https URLs
            return re.sub(r"^git\+", "", url)
        return ""

    def _extract_license(self, license_data: Any) -> str:
        # Old manifests use {"type": "MIT"}
        if isinstance(license_data, dict):
            return license_data.get("type") or ""
        return license_data if isinstance(license_data, str) else ""

    def _extract_maintainers(self, maintainers_data: Any) -> list[Maintainer]:
        maintainers = []
        for entry in maintainers_data or []:
            if isinstance(entry, dict) and entry.get("name"):
                maintainers.append(Maintainer(name=entry["name"], email=entry.get("email") or ""))
        return maintainers

    def _parse_time(self, value: Any) -> datetime | None:
        if not isinstance(value, str):
            return None
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.debug(f"Unparseable registry timestamp: {value}")
            return None
