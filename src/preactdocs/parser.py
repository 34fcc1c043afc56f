"""Docs-feed parser.

Splits a consolidated docs feed into sections and enriches each one with
derived metadata. Sections are delimited by a horizontal rule immediately
followed by a bold ``**Description:**`` label. Text before the first
delimiter is a preamble and is discarded.

The parser never raises on malformed input: a feed without delimiters simply
yields no sections.
"""

from __future__ import annotations

import re

import structlog

from preactdocs.models.section import DocumentSection
from preactdocs.rules import (
    FENCED_BLOCK_RE,
    classify_category,
    derive_tags,
    related_concepts,
)

log = structlog.get_logger()

SECTION_DELIMITER_RE = re.compile(
    r"^-{3,}[ \t]*\n(?:[ \t]*\n)*(?=\*\*Description:\*\*)",
    re.MULTILINE | re.IGNORECASE,
)
_DESCRIPTION_LABEL_RE = re.compile(r"^\*\*Description:\*\*\s*", re.IGNORECASE)

_HEADER_RE = re.compile(r"^#{1,6}\s+(.+?)\s*#*$")
_BOLD_LINE_RE = re.compile(r"^\*\*([^*]+)\*\*$")
_SIGNATURE_RE = re.compile(r"^`([^`]*\([^`]*)`$")
_LINE_ENDING_RE = re.compile(r"\r\n?")
_INLINE_CODE_RE = re.compile(r"`([^`\n]+)`")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]")
_PARENS_RE = re.compile(r"\([^)]*\)")

FALLBACK_TITLE = "Unknown"
MAX_FALLBACK_TITLE_LENGTH = 50
MIN_INLINE_EXAMPLE_LENGTH = 10
MAX_INLINE_EXAMPLES = 3
TRIGGER_PHRASES = ("used to", "allows you to", "returns")


def slugify(text: str) -> str:
    """``"useState() Hook"`` → ``"usestate-hook"``."""
    slug = re.sub(r"[^\w\s-]", "", text.lower())
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


def split_sections(raw_text: str) -> list[str]:
    """Split a feed on the section delimiter. Element 0 is the preamble.

    CRLF and bare CR line endings are normalised to LF first.
    """
    return SECTION_DELIMITER_RE.split(_LINE_ENDING_RE.sub("\n", raw_text))


def _prose_lines(fragment: str) -> list[str]:
    """Stripped, non-empty lines outside fenced code blocks."""
    lines: list[str] = []
    fence: str | None = None
    for line in fragment.splitlines():
        stripped = line.strip()
        if stripped.startswith("```") or stripped.startswith("~~~"):
            current = stripped[:3]
            if fence is None:
                fence = current
            elif current == fence:
                fence = None
            continue
        if fence is None and stripped:
            lines.append(stripped)
    return lines


def extract_description(fragment: str) -> str:
    for line in fragment.splitlines():
        stripped = line.strip()
        if stripped:
            return _DESCRIPTION_LABEL_RE.sub("", stripped).strip()
    return ""


def extract_title(fragment: str) -> str:
    """Pick a title by preference: header, bold line, signature, first line."""
    lines = [line for line in _prose_lines(fragment) if not _DESCRIPTION_LABEL_RE.match(line)]
    for pattern in (_HEADER_RE, _BOLD_LINE_RE, _SIGNATURE_RE):
        for line in lines:
            match = pattern.match(line)
            if match and match.group(1).strip():
                return match.group(1).strip()

    first = extract_description(fragment)[:MAX_FALLBACK_TITLE_LENGTH].strip()
    return first or FALLBACK_TITLE


def extract_code_examples(fragment: str) -> tuple[str, ...]:
    """Fenced blocks in order, then up to three long inline spans."""
    fenced = [match.group(0).strip() for match in FENCED_BLOCK_RE.finditer(fragment)]
    prose = FENCED_BLOCK_RE.sub("", fragment)
    inline = [
        f"`{span}`"
        for span in _INLINE_CODE_RE.findall(prose)
        if len(span) > MIN_INLINE_EXAMPLE_LENGTH
    ][:MAX_INLINE_EXAMPLES]
    return (*fenced, *inline)


def build_searchable_text(title: str, description: str, fragment: str) -> str:
    sentences = [
        sentence.strip()
        for sentence in _SENTENCE_SPLIT_RE.split(fragment)
        if any(phrase in sentence.lower() for phrase in TRIGGER_PHRASES)
    ]
    parts = [title, _PARENS_RE.sub("", title).strip(), description, *sentences]
    return " ".join(part for part in parts if part).lower()


class DocumentParser:
    """Turns raw docs-feed text into DocumentSection objects.

    Deterministic: the same input always yields the same sections in the
    same order with the same ids.
    """

    def parse(self, raw_text: str, repository: str) -> list[DocumentSection]:
        fragments = split_sections(raw_text)
        sections: list[DocumentSection] = []

        # Fragment 0 is the preamble before the first delimiter
        for index, fragment in enumerate(fragments[1:], start=1):
            section = self.parse_fragment(fragment, repository, index)
            if section is not None:
                sections.append(section)

        log.debug(
            "parse_complete",
            repository=repository,
            fragments=len(fragments) - 1,
            sections=len(sections),
        )
        return sections

    def parse_fragment(
        self, fragment: str, repository: str, index: int
    ) -> DocumentSection | None:
        """Build one section, or ``None`` if it has no title or description."""
        description = extract_description(fragment)
        title = extract_title(fragment)
        if not title or not description:
            return None

        return DocumentSection(
            id=f"{repository}-{slugify(title)}-{index}",
            repository=repository,
            title=title,
            description=description,
            content=fragment,
            code_examples=extract_code_examples(fragment),
            tags=derive_tags(title, fragment),
            category=classify_category(title, fragment),
            related=related_concepts(title, fragment),
            searchable_text=build_searchable_text(title, description, fragment),
        )
