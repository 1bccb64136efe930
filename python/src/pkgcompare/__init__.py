"""
Package Comparison

Side-by-side comparison of npm packages: bundle size, versions and dependencies,
and download popularity, aggregated from the npm registry, the npm downloads API
and the bundle size API.

Components:
- packages: upstream clients and suggestion search
- selection: selected package set and selection flow
- panels: size, version and downloads comparison panels
- comparison: wiring of the selection to the panels
"""

from .comparison import PackageComparison
from .config import CompareConfig
from .errors import FetchError, NotFoundError, PackageCompareError, PackageFetchError
from .models import DownloadInfo, Maintainer, ManifestInfo, PackageRecord, SearchPage, SizeInfo
from .notifications import Notification, Notifier
from .selection import PackageSelector, SelectionManager

__all__ = [
    "CompareConfig",
    "DownloadInfo",
    "FetchError",
    "Maintainer",
    "ManifestInfo",
    "NotFoundError",
    "Notification",
    "Notifier",
    "PackageCompareError",
    "PackageComparison",
    "PackageFetchError",
    "PackageRecord",
    "PackageSelector",
    "SearchPage",
    "SelectionManager",
    "SizeInfo"
]
