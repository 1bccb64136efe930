"""
Suggestion Search

Holds the state of the package name search box: query, accumulated suggestions and paging.
"""

from ..config import compare_logger
from ..errors import FetchError
from ..notifications import Notifier
from .npm_client import NPMClient


class SuggestionSearch:
    """Incremental, paged name suggestions for a search query."""

    def __init__(self, client: NPMClient, notifier: Notifier):
        self.client = client
        self.notifier = notifier
        self.query = ""
        self.suggestions: list[str] = []
        self.page = 1
        self.has_more = True
        self.loading = False
        self._request_seq = 0

    async def set_query(self, text: str) -> list[str]:
        """Replace the query and fetch its first page when it is long enough."""
        self.query = text
        self.page = 1
        if self.client.is_searchable(text):
            await self._fetch(1)
        else:
            self._invalidate()
            self.suggestions = []
        return self.suggestions

    async def load_more(self) -> bool:
        """Append the next page of suggestions. Returns False if nothing was requested."""
        if self.loading or not self.has_more or not self.client.is_searchable(self.query):
            return False
        await self._fetch(self.page + 1)
        return True

    def clear(self):
        self._invalidate()
        self.query = ""
        self.suggestions = []
        self.page = 1

    def _invalidate(self):
        # Responses for requests started before this point are dropped
        self._request_seq += 1
        self.loading = False

    async def _fetch(self, page: int):
        self._request_seq += 1
        request_seq = self._request_seq
        query = self.query

        self.loading = True
        try:
            result = await self.client.search_names(query, page)
        except FetchError as e:
            compare_logger.error(f"Error fetching suggestions for {query!r}: {e}")
            if request_seq == self._request_seq:
                self.notifier.error("Failed to fetch package suggestions")
            return
        finally:
            if request_seq == self._request_seq:
                self.loading = False

        if request_seq != self._request_seq:
            compare_logger.debug(f"Discarding stale suggestions for {query!r}")
            return

        if page == 1:
            self.suggestions = result.names
        else:
            self.suggestions = self.suggestions + result.names
        self.has_more = result.has_more
        self.page = page
