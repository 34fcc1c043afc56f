"""Unit tests for preactdocs.fetcher."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest
import respx

from preactdocs.config import FetcherSettings
from preactdocs.errors import ErrorCode, FetchError
from preactdocs.fetcher import Fetcher, build_http_client

if TYPE_CHECKING:
    from preactdocs.cache import CacheStore
    from tests.conftest import FakeClock

URL = "https://example.com/llms.txt"


class TestBuildHttpClient:
    def test_client_configuration(self) -> None:
        client = build_http_client(FetcherSettings(user_agent="test-agent/1"))
        assert isinstance(client, httpx.AsyncClient)
        assert client.follow_redirects is True
        assert client.headers["User-Agent"] == "test-agent/1"


class TestFetch:
    async def test_successful_fetch(self, cache: CacheStore) -> None:
        with respx.mock:
            respx.get(URL).mock(return_value=httpx.Response(200, text="# Docs"))
            async with httpx.AsyncClient() as client:
                result = await Fetcher(client, cache).fetch(URL)
        assert result == "# Docs"

    async def test_404_raises_non_recoverable(self, cache: CacheStore) -> None:
        with respx.mock:
            respx.get(URL).mock(return_value=httpx.Response(404))
            async with httpx.AsyncClient() as client:
                with pytest.raises(FetchError) as exc_info:
                    await Fetcher(client, cache).fetch(URL)
        assert exc_info.value.code == ErrorCode.FETCH_FAILED
        assert exc_info.value.url == URL
        assert "HTTP 404" in exc_info.value.message
        assert exc_info.value.recoverable is False

    async def test_500_raises_recoverable(self, cache: CacheStore) -> None:
        with respx.mock:
            respx.get(URL).mock(return_value=httpx.Response(500))
            async with httpx.AsyncClient() as client:
                with pytest.raises(FetchError) as exc_info:
                    await Fetcher(client, cache).fetch(URL)
        assert exc_info.value.recoverable is True

    async def test_network_error_wrapped(self, cache: CacheStore) -> None:
        with respx.mock:
            respx.get(URL).mock(side_effect=httpx.ConnectError("Connection refused"))
            async with httpx.AsyncClient() as client:
                with pytest.raises(FetchError) as exc_info:
                    await Fetcher(client, cache).fetch(URL)
        assert isinstance(exc_info.value.cause, httpx.ConnectError)
        assert exc_info.value.recoverable is True


class TestFetchWithCache:
    async def test_second_fetch_within_ttl_uses_cache(self, cache: CacheStore) -> None:
        with respx.mock:
            route = respx.get(URL).mock(return_value=httpx.Response(200, text="v1"))
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client, cache)
                assert await fetcher.fetch_with_cache(URL) == "v1"
                assert await fetcher.fetch_with_cache(URL) == "v1"
        assert route.call_count == 1

    async def test_fetch_after_ttl_hits_network_again(
        self, cache: CacheStore, clock: FakeClock
    ) -> None:
        with respx.mock:
            route = respx.get(URL).mock(
                side_effect=[httpx.Response(200, text="v1"), httpx.Response(200, text="v2")]
            )
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client, cache)
                assert await fetcher.fetch_with_cache(URL) == "v1"
                clock.advance(301)
                assert await fetcher.fetch_with_cache(URL) == "v2"
        assert route.call_count == 2

    async def test_failure_leaves_stale_entry_untouched(
        self, cache: CacheStore, clock: FakeClock
    ) -> None:
        cache.set(URL, "old")
        stamped_at = clock.now
        clock.advance(301)

        with respx.mock:
            respx.get(URL).mock(return_value=httpx.Response(503))
            async with httpx.AsyncClient() as client:
                with pytest.raises(FetchError):
                    await Fetcher(client, cache).fetch_with_cache(URL)

        assert cache.get(URL) is None
        clock.now = stamped_at
        entry = cache.get(URL)
        assert entry is not None
        assert entry.text == "old"

    async def test_failure_is_not_cached(self, cache: CacheStore) -> None:
        with respx.mock:
            route = respx.get(URL).mock(
                side_effect=[httpx.Response(500), httpx.Response(200, text="ok")]
            )
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client, cache)
                with pytest.raises(FetchError):
                    await fetcher.fetch_with_cache(URL)
                assert await fetcher.fetch_with_cache(URL) == "ok"
        assert route.call_count == 2
