"""Ranking of raw index hits.

Order is by priority class ascending, then raw score descending, then
index insertion order. Results are de-duplicated by section id.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from preactdocs.index import SearchHit
    from preactdocs.models.section import DocumentSection

DEFAULT_MAX_RESULTS = 10


class RankingEngine:
    def __init__(self, max_results: int = DEFAULT_MAX_RESULTS) -> None:
        self.max_results = max_results

    def rank(self, hits: Iterable[SearchHit]) -> list[DocumentSection]:
        ordered = sorted(hits, key=lambda hit: (hit.priority, -hit.score, hit.position))

        seen: set[str] = set()
        ranked: list[DocumentSection] = []
        for hit in ordered:
            if hit.section.id in seen:
                continue
            seen.add(hit.section.id)
            ranked.append(hit.section)
            if len(ranked) == self.max_results:
                break
        return ranked
