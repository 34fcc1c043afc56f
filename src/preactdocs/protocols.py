"""Protocol interfaces for swappable components.

The data source and AppState reference these protocols, not the concrete
implementations, so tests can substitute lightweight fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from preactdocs.models.cache import CacheEntry


class CacheProtocol(Protocol):
    """Interface for the URL-keyed text cache."""

    def get(self, url: str) -> CacheEntry | None: ...

    def set(self, url: str, text: str) -> CacheEntry: ...


class FetcherProtocol(Protocol):
    """Interface for the cache-aware HTTP fetcher."""

    async def fetch(self, url: str) -> str: ...

    async def fetch_with_cache(self, url: str) -> str: ...
