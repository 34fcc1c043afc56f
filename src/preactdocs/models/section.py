from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DocumentSection(BaseModel):
    """One addressable section of a docs feed, with derived metadata."""

    model_config = ConfigDict(frozen=True)

    id: str
    repository: str
    title: str
    description: str
    content: str  # Raw fragment text, kept for re-extraction
    code_examples: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()  # Sorted, lower-case
    category: str = "general"
    related: tuple[str, ...] = ()  # Sorted
    searchable_text: str = ""
