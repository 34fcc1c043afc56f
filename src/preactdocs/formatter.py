"""Human-readable rendering of ranked sections."""

from __future__ import annotations

from typing import TYPE_CHECKING

from preactdocs.rules import DEFAULT_CATEGORY, usage_note

if TYPE_CHECKING:
    from collections.abc import Iterable

    from preactdocs.models.section import DocumentSection

SECTION_SEPARATOR = "\n\n"


class ResultFormatter:
    def format_section(
        self,
        section: DocumentSection,
        query: str,
        *,
        include_examples: bool = True,
    ) -> str:
        lines = [f"### {section.title}"]
        if section.category != DEFAULT_CATEGORY:
            lines.append(f"**Category:** {section.category}")
        lines.append(section.description)

        # Only the first example is shown
        if include_examples and section.code_examples:
            lines.append(f"**Example:**\n{section.code_examples[0]}")

        note = usage_note(query, section.title, section.category)
        if note:
            lines.append(f"**Usage:** {note}")
        if section.related:
            lines.append(f"**Related:** {', '.join(section.related)}")
        if section.tags:
            lines.append(f"**Tags:** {', '.join(section.tags)}")
        return "\n".join(lines)

    def format_all(
        self,
        sections: Iterable[DocumentSection],
        query: str,
        *,
        include_examples: bool = True,
    ) -> list[str]:
        return [
            self.format_section(section, query, include_examples=include_examples)
            for section in sections
        ]

    def join(self, blocks: Iterable[str]) -> str:
        return SECTION_SEPARATOR.join(blocks)
