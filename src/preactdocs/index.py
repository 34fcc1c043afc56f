"""In-memory full-text index over document sections.

The index is partitioned by repository: ``reindex`` replaces one
repository's partition wholesale and never touches another's. Matching is
term-based with exact, prefix and fuzzy (Levenshtein) term expansion, OR
combination across query terms, and per-field boosts.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog
from rapidfuzz.distance import Levenshtein

from preactdocs.rules import classify_priority

if TYPE_CHECKING:
    from collections.abc import Iterable

    from preactdocs.models.section import DocumentSection

log = structlog.get_logger()

_TOKEN_RE = re.compile(r"\w+")

FIELD_BOOSTS: dict[str, float] = {
    "title": 3.0,
    "description": 2.0,
    "category": 2.0,
    "searchable_text": 1.0,
    "tags": 0.5,
}

EXACT_WEIGHT = 1.0
EXPANSION_WEIGHT = 0.5
MIN_PREFIX_LENGTH = 2

# BM25 parameters
_K1 = 1.2
_B = 0.7


def tokenize(text: str) -> list[str]:
    return _TOKEN_RE.findall(text.lower())


def _field_text(section: DocumentSection, name: str) -> str:
    if name == "tags":
        return " ".join(section.tags)
    return getattr(section, name)


class SectionStore:
    """Currently indexed sections, keyed by repository then section id."""

    def __init__(self) -> None:
        self._by_repository: dict[str, dict[str, DocumentSection]] = {}

    def replace(
        self, repository: str, sections: Iterable[DocumentSection]
    ) -> list[DocumentSection]:
        """Drop everything stored for ``repository`` and store ``sections``.

        Returns the stored sections in insertion order, one per id.
        """
        fresh: dict[str, DocumentSection] = {}
        for section in sections:
            fresh.setdefault(section.id, section)
        self._by_repository[repository] = fresh
        return list(fresh.values())

    def count(self, repository: str | None = None) -> int:
        if repository is not None:
            return len(self._by_repository.get(repository, {}))
        return sum(len(sections) for sections in self._by_repository.values())


@dataclass(frozen=True)
class SearchHit:
    """Raw index match before ranking."""

    section: DocumentSection
    score: float
    priority: int
    position: int  # Insertion order within the partition


@dataclass
class _Document:
    section: DocumentSection
    priority: int
    position: int
    fields: dict[str, Counter[str]]
    lengths: dict[str, int]


@dataclass
class _Partition:
    documents: list[_Document] = field(default_factory=list)
    # term -> {document position -> {field -> term frequency}}
    postings: dict[str, dict[int, dict[str, int]]] = field(default_factory=dict)
    average_lengths: dict[str, float] = field(default_factory=dict)


class SearchIndex:
    """Weighted full-text index, one partition per repository."""

    def __init__(
        self,
        store: SectionStore | None = None,
        *,
        fuzzy: float = 0.2,
        prefix: bool = True,
        boosts: dict[str, float] | None = None,
    ) -> None:
        self.store = store if store is not None else SectionStore()
        self.fuzzy = fuzzy
        self.prefix = prefix
        self.boosts = dict(boosts or FIELD_BOOSTS)
        self._partitions: dict[str, _Partition] = {}

    def reindex(self, repository: str, sections: Iterable[DocumentSection]) -> int:
        """Replace all entries for ``repository``. Returns the number indexed."""
        stored = self.store.replace(repository, sections)
        partition = _Partition()

        for position, section in enumerate(stored):
            priority = classify_priority(section.title, section.content)
            fields = {name: Counter(tokenize(_field_text(section, name))) for name in self.boosts}
            document = _Document(
                section=section,
                priority=priority,
                position=position,
                fields=fields,
                lengths={name: sum(counts.values()) for name, counts in fields.items()},
            )
            partition.documents.append(document)
            for name, counts in fields.items():
                for term, frequency in counts.items():
                    partition.postings.setdefault(term, {}).setdefault(position, {})[name] = (
                        frequency
                    )

        if partition.documents:
            for name in self.boosts:
                total = sum(document.lengths[name] for document in partition.documents)
                partition.average_lengths[name] = total / len(partition.documents)

        self._partitions[repository] = partition
        log.info(
            "reindex_complete",
            repository=repository,
            sections=len(stored),
            total_sections=self.store.count(),
        )
        return len(stored)

    def search(self, query: str, repository: str) -> list[SearchHit]:
        """Return every section in ``repository`` matching any query term.

        Hits are in insertion order; ordering by usefulness is the
        RankingEngine's job.
        """
        partition = self._partitions.get(repository)
        if partition is None or not partition.documents:
            return []

        scores: dict[int, float] = {}
        for query_term in dict.fromkeys(tokenize(query)):
            for term, weight in self._expand(query_term, partition).items():
                self._score_term(term, weight, partition, scores)

        return [
            SearchHit(
                section=document.section,
                score=scores[document.position],
                priority=document.priority,
                position=document.position,
            )
            for document in partition.documents
            if scores.get(document.position, 0.0) > 0.0
        ]

    def _expand(self, query_term: str, partition: _Partition) -> dict[str, float]:
        """Map index terms matching ``query_term`` to their match weight."""
        max_distance = round(self.fuzzy * len(query_term))
        matches: dict[str, float] = {}

        for term in partition.postings:
            if term == query_term:
                matches[term] = EXACT_WEIGHT
                continue

            weight = 0.0
            if (
                self.prefix
                and len(query_term) >= MIN_PREFIX_LENGTH
                and term.startswith(query_term)
            ):
                weight = EXPANSION_WEIGHT * len(query_term) / len(term)
            if max_distance >= 1:
                distance = Levenshtein.distance(query_term, term, score_cutoff=max_distance)
                if distance <= max_distance:
                    similarity = 1.0 - distance / max(len(term), len(query_term))
                    weight = max(weight, EXPANSION_WEIGHT * similarity)
            if weight > 0.0:
                matches[term] = weight

        return matches

    def _score_term(
        self,
        term: str,
        weight: float,
        partition: _Partition,
        scores: dict[int, float],
    ) -> None:
        postings = partition.postings[term]
        total = len(partition.documents)
        idf = math.log(1 + (total - len(postings) + 0.5) / (len(postings) + 0.5))

        for position, frequencies in postings.items():
            document = partition.documents[position]
            for name, frequency in frequencies.items():
                average = partition.average_lengths.get(name) or 1.0
                norm = 1 - _B + _B * document.lengths[name] / average
                tf = frequency * (_K1 + 1) / (frequency + _K1 * norm)
                contribution = weight * self.boosts[name] * idf * tf
                scores[position] = scores.get(position, 0.0) + contribution
