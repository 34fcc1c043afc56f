"""In-memory TTL cache over remote fetches.

Entries are keyed by URL alone, so two repositories pointing at the same
URL share one entry. An entry is served only while ``now - fetched_at`` is
below the TTL; stale entries are logically absent and are overwritten by the
next successful fetch. Failed fetches never touch the cache.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog

from preactdocs.models.cache import CacheEntry

log = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CacheStore:
    """Process-wide URL → text cache implementing CacheProtocol."""

    def __init__(
        self,
        ttl_seconds: int = 300,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.fetched_at < self._ttl

    def get(self, url: str) -> CacheEntry | None:
        """Return the entry for ``url`` if present and fresh, else ``None``."""
        entry = self._entries.get(url)
        if entry is None:
            return None
        if not self.is_fresh(entry):
            log.debug("cache_entry_stale", url=url, fetched_at=entry.fetched_at.isoformat())
            return None
        return entry

    def set(self, url: str, text: str) -> CacheEntry:
        """Overwrite the entry for ``url`` with ``text`` stamped at the current time."""
        entry = CacheEntry(url=url, text=text, fetched_at=self._clock())
        self._entries[url] = entry
        return entry
