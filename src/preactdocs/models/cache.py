from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """Last successfully fetched text for a URL."""

    url: str
    text: str
    fetched_at: datetime
