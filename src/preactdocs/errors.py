from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    REPOSITORY_NOT_FOUND = "REPOSITORY_NOT_FOUND"
    FETCH_FAILED = "FETCH_FAILED"
    INVALID_INPUT = "INVALID_INPUT"


class DocsError(Exception):
    """Raised by the retrieval layer for all expected failure conditions.

    Caught by server.py and rendered as a user-visible error payload.
    Business logic lets it propagate; the only place it is recovered
    locally is the docs-feed half of a combined query.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable


class NotFoundError(DocsError):
    """Unknown repository name."""

    def __init__(self, repository: str) -> None:
        super().__init__(
            code=ErrorCode.REPOSITORY_NOT_FOUND,
            message=f"Repository '{repository}' not found",
            suggestion="Call list_preact_repositories to see the valid repository names.",
            recoverable=False,
        )
        self.repository = repository


class FetchError(DocsError):
    """Network failure or non-2xx response while retrieving a URL."""

    def __init__(
        self,
        url: str,
        cause: BaseException | str,
        *,
        recoverable: bool = True,
    ) -> None:
        super().__init__(
            code=ErrorCode.FETCH_FAILED,
            message=f"Failed to fetch {url}: {cause}",
            suggestion="The documentation source may be temporarily unavailable.",
            recoverable=recoverable,
        )
        self.url = url
        self.cause = cause
