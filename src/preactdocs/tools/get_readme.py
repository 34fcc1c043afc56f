"""Tool handler for get_preact_readme.

Validates input and delegates to DocsDataSource.get_readme. Fetch failures
propagate: the README is the only data source for this operation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from preactdocs.errors import DocsError, ErrorCode
from preactdocs.models.tools import GetReadmeInput

if TYPE_CHECKING:
    from preactdocs.state import AppState


async def handle(repository: str, state: AppState) -> str:
    """Handle a get_preact_readme tool call."""
    log = structlog.get_logger().bind(tool="get_preact_readme", repository=repository)
    log.info("handler_called")

    try:
        validated = GetReadmeInput(repository=repository)
    except ValidationError as exc:
        raise DocsError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a repository name from list_preact_repositories.",
            recoverable=False,
        ) from exc

    text = await state.datasource.get_readme(validated.repository)
    log.info("readme_returned", content_length=len(text))
    return text
