"""Streamable HTTP transport and request guard for the MCP server."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.datastructures import Headers
from starlette.responses import Response

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP
    from starlette.types import ASGIApp, Receive, Scope, Send

    from preactdocs.config import Settings

log = structlog.get_logger()

_LOCAL_ORIGIN = re.compile(r"^https?://(localhost|127\.0\.0\.1|\[::1\])(:\d+)?$")


class RequestGuardMiddleware:
    """Pure ASGI middleware applied to every HTTP request.

    Rejects requests whose Origin is not a local address. Requests without an
    Origin header (non-browser clients) pass through. Pure ASGI so streamed
    responses pass through unbuffered.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            origin = Headers(scope=scope).get("origin", "")
            if origin and not _LOCAL_ORIGIN.match(origin):
                log.warning("http_origin_rejected", origin=origin)
                await Response("Forbidden", status_code=403)(scope, receive, send)
                return

        await self.app(scope, receive, send)


def run_http_server(mcp: FastMCP, settings: Settings) -> None:
    """Serve the MCP app over Streamable HTTP with uvicorn."""
    log.info(
        "http_server_starting",
        transport="http",
        host=settings.server.host,
        port=settings.server.port,
    )
    uvicorn.run(
        RequestGuardMiddleware(mcp.streamable_http_app()),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # structlog handles logging
    )
