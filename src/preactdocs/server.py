"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools
- Start the correct transport (stdio or HTTP)
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent

import preactdocs.tools.get_readme as t_get_readme
import preactdocs.tools.list_repositories as t_list
import preactdocs.tools.query_docs as t_query
from preactdocs import __version__
from preactdocs.config import Settings
from preactdocs.errors import DocsError
from preactdocs.fetcher import build_http_client
from preactdocs.state import AppState, create_app_state
from preactdocs.transport import run_http_server

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr — stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Create and tear down all shared resources for the server's lifetime."""
    settings = Settings()
    _setup_logging(settings)

    log.info("server_starting", version=__version__, transport=settings.server.transport)

    http_client = build_http_client(settings.fetcher)
    state = create_app_state(settings, http_client)

    log.info(
        "server_started",
        version=__version__,
        transport=settings.server.transport,
        repositories=len(state.registry),
    )

    try:
        yield state
    finally:
        await http_client.aclose()
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP("preactdocs", lifespan=lifespan)
# FastMCP doesn't expose a version kwarg — set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


def _serialise_tool_error(error: DocsError) -> CallToolResult:
    """Convert a DocsError to a user-visible MCP error result."""
    return CallToolResult(
        content=[TextContent(type="text", text=f"Error: {error.message}")],
        isError=True,
    )


def _log_tool_error(tool: str, exc: DocsError) -> None:
    log.warning(
        "tool_error",
        tool=tool,
        code=exc.code,
        message=exc.message,
        suggestion=exc.suggestion,
        recoverable=exc.recoverable,
    )


@mcp.tool()
async def list_preact_repositories(ctx: Context) -> object:
    """List all Preact ecosystem repositories that can be queried."""
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_list.handle(state)
    except Exception:
        log.error("tool_unexpected_error", tool="list_preact_repositories", exc_info=True)
        raise


@mcp.tool()
async def get_preact_readme(repository: str, ctx: Context) -> object:
    """Get the README content from a specific Preact repository."""
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_get_readme.handle(repository, state)
    except DocsError as exc:
        _log_tool_error("get_preact_readme", exc)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="get_preact_readme", exc_info=True)
        raise


@mcp.tool()
async def query_preact_docs(
    query: str,
    ctx: Context,
    repository: str = "preact",
    include_examples: bool = True,
) -> object:
    """Query Preact documentation from multiple repositories.

    Searches the consolidated docs feed for the repository (default: preact)
    and, for non-core repositories, appends the repository README.
    """
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_query.handle(query, state, repository, include_examples)
    except DocsError as exc:
        _log_tool_error("query_preact_docs", exc)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="query_preact_docs", exc_info=True)
        raise


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()

    if settings.server.transport == "http":
        _setup_logging(settings)
        run_http_server(mcp, settings)
        return

    mcp.run()


if __name__ == "__main__":
    main()
