"""Top-level retrieval operations consumed by the tool handlers.

A query runs sequentially: fetch (via cache) → parse → reindex → search →
rank → format. Re-indexing replaces shared index state for the repository,
so overlapping queries against the same repository are not isolated from
each other; callers needing isolation must serialise them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from preactdocs.errors import FetchError

if TYPE_CHECKING:
    from preactdocs.formatter import ResultFormatter
    from preactdocs.index import SearchIndex
    from preactdocs.parser import DocumentParser
    from preactdocs.protocols import FetcherProtocol
    from preactdocs.ranking import RankingEngine
    from preactdocs.registry import RepositoryRegistry

log = structlog.get_logger()

BLOCK_SEPARATOR = "\n\n---\n\n"


def no_results_message(query: str) -> str:
    return f'No results found for query: "{query}"'


class DocsDataSource:
    """Owns the query path; all collaborators are injected at startup."""

    def __init__(
        self,
        *,
        registry: RepositoryRegistry,
        fetcher: FetcherProtocol,
        parser: DocumentParser,
        index: SearchIndex,
        ranking: RankingEngine,
        formatter: ResultFormatter,
    ) -> None:
        self.registry = registry
        self.fetcher = fetcher
        self.parser = parser
        self.index = index
        self.ranking = ranking
        self.formatter = formatter

    async def get_readme(self, repository: str) -> str:
        """Return a repository README under a ``# {name} README`` header.

        Raises NotFoundError for unknown names and FetchError if retrieval
        fails or the README body is empty.
        """
        repo = self.registry.get(repository)
        content = await self.fetcher.fetch_with_cache(repo.readme_url)
        if not content.strip():
            raise FetchError(repo.readme_url, f"empty README for {repo.name}")
        return f"# {repo.name} README\n\n{content}"

    async def query_docs(
        self,
        query: str,
        repository: str,
        include_examples: bool = True,
    ) -> str:
        """Search a repository's docs feed and append its README.

        Only an unknown repository is a hard failure; fetch failures become
        inline error blocks.
        """
        repo = self.registry.get(repository)
        blocks: list[str] = []

        if repo.docs_url:
            try:
                feed = await self.fetcher.fetch_with_cache(repo.docs_url)
            except FetchError as exc:
                log.warning("docs_feed_unavailable", repository=repo.name, url=exc.url)
                blocks.append(f"## {repo.name} Documentation: Unable to fetch ({exc.message})")
            else:
                results = self.search(feed, query, repo.name, include_examples=include_examples)
                if results:
                    blocks.append(
                        f"## {repo.name} Documentation Results:\n{self.formatter.join(results)}"
                    )

        if not self.registry.is_primary(repo.name):
            try:
                readme = await self.fetcher.fetch_with_cache(repo.readme_url)
            except FetchError as exc:
                log.warning("readme_unavailable", repository=repo.name, url=exc.url)
                blocks.append(f"## {repo.name}: Error - {exc.message}")
            else:
                blocks.append(f"## {repo.name} README Results:\n{readme}")

        if not blocks:
            return no_results_message(query)
        return BLOCK_SEPARATOR.join(blocks)

    def search(
        self,
        feed: str,
        query: str,
        repository: str,
        *,
        include_examples: bool = True,
    ) -> list[str]:
        """Re-index ``repository`` from ``feed`` and return formatted results."""
        sections = self.parser.parse(feed, repository)
        self.index.reindex(repository, sections)
        hits = self.index.search(query, repository)
        ranked = self.ranking.rank(hits)
        log.info(
            "search_complete",
            repository=repository,
            sections=len(sections),
            hits=len(hits),
            returned=len(ranked),
        )
        return self.formatter.format_all(ranked, query, include_examples=include_examples)
