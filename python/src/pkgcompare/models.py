"""
Package Comparison Models

This module defines the data models shared by the clients, the selection and the panels.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime


@dataclass
class Maintainer:
    """A registry maintainer entry."""
    name: str
    email: str = ""


@dataclass
class SizeInfo:
    """Bundle size figures in bytes."""
    minified: int
    gzip: int
    total: int  # total with dependencies


@dataclass
class DownloadInfo:
    """Download counts for one package."""
    weekly: int = 0
    monthly: int = 0
    total: int = 0


@dataclass
class ManifestInfo:
    """The parts of the latest manifest that the version panel tracks."""
    version: str
    dependencies: dict[str, str] = field(default_factory=dict)
    peer_dependencies: dict[str, str] = field(default_factory=dict)


@dataclass
class PackageRecord:
    """One selected package, optionally enriched by the comparison panels."""
    name: str
    version: str
    description: str = ""
    license: str = ""
    author: str = ""
    repository: str = ""
    keywords: list[str] = field(default_factory=list)
    maintainers: list[Maintainer] = field(default_factory=list)
    created_at: datetime | None = None
    modified_at: datetime | None = None
    size: SizeInfo | None = None
    downloads: DownloadInfo | None = None
    dependencies: dict[str, str] | None = None
    peer_dependencies: dict[str, str] | None = None

    def with_updates(self, **changes) -> "PackageRecord":
        """Return an enriched copy, leaving this record untouched."""
        return replace(self, **changes)

    @property
    def display_author(self) -> str:
        return self.author or "Unknown"

    @property
    def display_license(self) -> str:
        return self.license or "No license"


@dataclass
class SearchPage:
    """One page of registry search suggestions."""
    names: list[str]
    page: int
    has_more: bool
