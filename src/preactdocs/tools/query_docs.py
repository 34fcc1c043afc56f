"""Tool handler for query_preact_docs.

Validates input and delegates to DocsDataSource.query_docs, which recovers
docs-feed fetch failures inline. Only invalid input and unknown repositories
surface as errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from preactdocs.errors import DocsError, ErrorCode
from preactdocs.models.tools import QueryDocsInput

if TYPE_CHECKING:
    from preactdocs.state import AppState


async def handle(
    query: str,
    state: AppState,
    repository: str | None = None,
    include_examples: bool = True,
) -> str:
    """Handle a query_preact_docs tool call."""
    log = structlog.get_logger().bind(tool="query_preact_docs", query=query, repository=repository)
    log.info("handler_called")

    try:
        validated = QueryDocsInput.model_validate(
            {
                "query": query,
                "repository": repository or state.registry.primary,
                "include_examples": include_examples,
            },
            context={"max_query_length": state.settings.search.max_query_length},
        )
    except ValidationError as exc:
        raise DocsError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion=(
                "Provide a non-empty query (max "
                f"{state.settings.search.max_query_length} chars) and a known repository."
            ),
            recoverable=False,
        ) from exc

    text = await state.datasource.query_docs(
        validated.query,
        validated.repository,
        include_examples=validated.include_examples,
    )
    log.info("query_complete", content_length=len(text))
    return text
