"""Application state container.

AppState is created once at server startup (inside the FastMCP lifespan
context manager) and injected into every tool handler via the MCP Context
object. It owns the cache and index for the process lifetime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from preactdocs.cache import CacheStore
from preactdocs.datasource import DocsDataSource
from preactdocs.fetcher import Fetcher
from preactdocs.formatter import ResultFormatter
from preactdocs.index import SearchIndex
from preactdocs.parser import DocumentParser
from preactdocs.ranking import RankingEngine
from preactdocs.registry import RepositoryRegistry

if TYPE_CHECKING:
    import httpx

    from preactdocs.config import Settings
    from preactdocs.protocols import CacheProtocol


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every tool handler."""

    settings: Settings
    registry: RepositoryRegistry
    cache: CacheProtocol
    datasource: DocsDataSource
    http_client: httpx.AsyncClient | None = None


def create_app_state(
    settings: Settings,
    http_client: httpx.AsyncClient,
    *,
    registry: RepositoryRegistry | None = None,
    cache: CacheProtocol | None = None,
) -> AppState:
    """Wire cache, fetcher, parser, index, ranking and formatter together."""
    registry = registry if registry is not None else RepositoryRegistry()
    cache = cache if cache is not None else CacheStore(settings.cache.ttl_seconds)

    datasource = DocsDataSource(
        registry=registry,
        fetcher=Fetcher(http_client, cache),
        parser=DocumentParser(),
        index=SearchIndex(fuzzy=settings.search.fuzzy, prefix=settings.search.prefix),
        ranking=RankingEngine(settings.search.max_results),
        formatter=ResultFormatter(),
    )
    return AppState(
        settings=settings,
        registry=registry,
        cache=cache,
        datasource=datasource,
        http_client=http_client,
    )
