"""
Package Data Clients

Provides clients for the three upstream data providers used by the comparison panels.

This module supports:
- npm registry name search with incremental paging
- npm registry package metadata and dependency maps
- Weekly, monthly and total download statistics
- Minified, gzip and dependency bundle sizes

Components:
- npm_client: npm registry client
- search: suggestion search state
- downloads_client: download statistics client
- bundle_client: bundle size client
"""

from .bundle_client import BundleSizeClient
from .downloads_client import DownloadsClient
from .npm_client import NPMClient
from .search import SuggestionSearch

__all__ = [
    "BundleSizeClient",
    "DownloadsClient",
    "NPMClient",
    "SuggestionSearch"
]
