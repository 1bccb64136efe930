"""
Package Comparison Errors

Error types raised by the upstream clients and the package selector.
"""


class PackageCompareError(Exception):
    """Base class for comparison errors."""


class FetchError(PackageCompareError):
    """An upstream call failed: transport error, non-2xx status or malformed payload."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url = url
        self.message = message
        self.status_code = status_code
        super().__init__(f"{message} ({url})")


class NotFoundError(FetchError):
    """The registry has no manifest for the requested package."""


class PackageFetchError(PackageCompareError):
    """Fetching one dimension of one package failed."""

    def __init__(self, package: str, dimension: str, reason: str | None = None):
        self.package = package
        self.dimension = dimension
        self.reason = reason
        message = f"Failed to fetch {dimension} data for {package}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
