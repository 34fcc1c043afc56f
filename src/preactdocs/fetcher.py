"""HTTP documentation fetcher.

All network I/O goes through a single Fetcher instance shared across tool
calls. The Fetcher receives an httpx.AsyncClient and the cache via
constructor injection — the lifespan owns both lifecycles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from preactdocs.errors import FetchError

if TYPE_CHECKING:
    from preactdocs.config import FetcherSettings
    from preactdocs.protocols import CacheProtocol

log = structlog.get_logger()


def build_http_client(settings: FetcherSettings | None = None) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    timeout = settings.timeout_seconds if settings is not None else 30.0
    user_agent = settings.user_agent if settings is not None else "preactdocs/1.0"
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(timeout),
        headers={"User-Agent": user_agent},
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
        ),
    )


class Fetcher:
    """Cache-aware fetcher implementing FetcherProtocol."""

    def __init__(self, client: httpx.AsyncClient, cache: CacheProtocol) -> None:
        self._client = client
        self._cache = cache

    async def fetch(self, url: str) -> str:
        """Fetch ``url`` from the network, bypassing the cache.

        Raises FetchError on network errors and non-2xx responses.
        """
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise FetchError(url, exc, recoverable=True) from exc

        if not response.is_success:
            raise FetchError(
                url,
                f"HTTP {response.status_code}: {response.reason_phrase}",
                recoverable=response.status_code >= 500,
            )

        log.info(
            "fetch_complete",
            url=url,
            status_code=response.status_code,
            content_length=len(response.text),
        )
        return response.text

    async def fetch_with_cache(self, url: str) -> str:
        """Return fresh cached text for ``url`` or fetch and cache it.

        The cache is written only after a successful fetch; on failure the
        previous (stale or missing) entry is left untouched.
        """
        entry = self._cache.get(url)
        if entry is not None:
            log.debug("cache_hit", url=url)
            return entry.text

        log.info("cache_miss_fetching", url=url)
        text = await self.fetch(url)
        self._cache.set(url, text)
        return text
