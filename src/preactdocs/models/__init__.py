from __future__ import annotations

from preactdocs.models.cache import CacheEntry
from preactdocs.models.repository import Repository
from preactdocs.models.section import DocumentSection
from preactdocs.models.tools import (
    GetReadmeInput,
    QueryDocsInput,
)

__all__ = [
    # registry
    "Repository",
    # cache
    "CacheEntry",
    # index
    "DocumentSection",
    # tools
    "GetReadmeInput",
    "QueryDocsInput",
]
