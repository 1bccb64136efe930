"""
Comparison Panels

Each panel observes the selection and enriches its own copy of the records with one dimension.

Components:
- base: batch refresh, failure isolation and stale batch guard
- size_panel: minified, gzip and dependency sizes
- version_panel: latest version and dependency maps
- downloads_panel: weekly, monthly and total downloads
"""

from .base import ComparisonPanel
from .downloads_panel import DownloadsPanel
from .size_panel import SizePanel
from .version_panel import VersionPanel

__all__ = [
    "ComparisonPanel",
    "DownloadsPanel",
    "SizePanel",
    "VersionPanel"
]
