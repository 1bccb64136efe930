"""
Upstream Client Base

Shared HTTP session handling for the registry, downloads and bundle size clients.
"""

import logging
from typing import Any

import httpx

from ..config import CompareConfig
from ..errors import FetchError, NotFoundError

logger = logging.getLogger(__name__)


class UpstreamClient:
    """Base class for read-only JSON API clients."""

    def __init__(self, config: CompareConfig | None = None, http_client: httpx.AsyncClient | None = None):
        """
        Initialize the client.

        Args:
            config: Provider configuration (defaults are used if not provided)
            http_client: Shared session; the caller stays responsible for closing it
        """
        self.config = config or CompareConfig()
        self.timeout = self.config.timeout
        self.session: httpx.AsyncClient | None = http_client
        self._owns_session = http_client is None

    async def _get_session(self) -> httpx.AsyncClient:
        """Get or create HTTP session."""
        if self.session is None:
            self.session = httpx.AsyncClient(timeout=self.timeout)
            self._owns_session = True
        return self.session

    async def aclose(self):
        """Close the HTTP session if this client created it."""
        if self.session and self._owns_session:
            await self.session.aclose()
            self.session = None

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET a URL and decode its JSON body, mapping failures to FetchError."""
        session = await self._get_session()
        try:
            response = await session.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                raise NotFoundError(url, "Not found", status_code=status) from e
            raise FetchError(url, f"HTTP {status}", status_code=status) from e
        except httpx.HTTPError as e:
            raise FetchError(url, f"Request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(url, "Malformed JSON response", status_code=response.status_code) from e

        logger.debug(f"GET {url} -> {response.status_code}")
        return data
