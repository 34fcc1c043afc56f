"""Unit tests for ResultFormatter."""

from __future__ import annotations

from preactdocs.formatter import ResultFormatter
from preactdocs.models.section import DocumentSection
from preactdocs.rules import USAGE_NOTES

USE_STATE = DocumentSection(
    id="preact-usestate-1",
    repository="preact",
    title="useState",
    description="Hook for state",
    content="",
    code_examples=("```jsx\nconst [a, setA] = useState(0);\n```", "`setA(a + 1)`"),
    tags=("state", "usestate"),
    category="hooks",
    related=("hooks", "useEffect", "useState"),
)

PLAIN = DocumentSection(
    id="preact-differences-2",
    repository="preact",
    title="Differences",
    description="How Preact differs",
    content="",
    category="general",
)


class TestFormatSection:
    def test_full_layout(self) -> None:
        text = ResultFormatter().format_section(USE_STATE, "useState")
        assert text == (
            "### useState\n"
            "**Category:** hooks\n"
            "Hook for state\n"
            "**Example:**\n```jsx\nconst [a, setA] = useState(0);\n```\n"
            f"**Usage:** {dict(USAGE_NOTES)['usestate']}\n"
            "**Related:** hooks, useEffect, useState\n"
            "**Tags:** state, usestate"
        )

    def test_only_first_example(self) -> None:
        text = ResultFormatter().format_section(USE_STATE, "useState")
        assert "setA(a + 1)" not in text

    def test_examples_excluded_when_disabled(self) -> None:
        text = ResultFormatter().format_section(USE_STATE, "useState", include_examples=False)
        assert "Example" not in text

    def test_no_example_block_without_examples(self) -> None:
        text = ResultFormatter().format_section(PLAIN, "xyz", include_examples=True)
        assert "Example" not in text

    def test_general_category_and_empty_lines_omitted(self) -> None:
        text = ResultFormatter().format_section(PLAIN, "xyz")
        assert text == "### Differences\nHow Preact differs"


class TestFormatAll:
    def test_joined_with_blank_line(self) -> None:
        formatter = ResultFormatter()
        blocks = formatter.format_all([PLAIN, PLAIN], "xyz")
        assert formatter.join(blocks) == (
            "### Differences\nHow Preact differs\n\n### Differences\nHow Preact differs"
        )
