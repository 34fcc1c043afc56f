"""Tests for RequestGuardMiddleware (HTTP transport).

Each test exercises the middleware directly via httpx's ASGI transport so no
real server is started. The inner app is a trivial 200-OK responder that
never runs if the middleware short-circuits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from preactdocs.transport import RequestGuardMiddleware

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send


async def _ok_app(scope: Scope, receive: Receive, send: Send) -> None:
    await send({"type": "http.response.start", "status": 200, "headers": []})
    await send({"type": "http.response.body", "body": b"ok"})


def _client(app: ASGIApp) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://localhost",
    )


class TestOrigin:
    async def test_missing_origin_allowed(self) -> None:
        app = RequestGuardMiddleware(_ok_app)
        async with _client(app) as client:
            response = await client.get("/mcp")
        assert response.status_code == 200

    async def test_authorization_header_not_required(self) -> None:
        app = RequestGuardMiddleware(_ok_app)
        async with _client(app) as client:
            response = await client.get("/mcp", headers={"Authorization": "Bearer anything"})
        assert response.status_code == 200

    async def test_localhost_origin_allowed(self) -> None:
        app = RequestGuardMiddleware(_ok_app)
        async with _client(app) as client:
            response = await client.get("/mcp", headers={"Origin": "http://localhost:3000"})
        assert response.status_code == 200

    async def test_foreign_origin_forbidden(self) -> None:
        app = RequestGuardMiddleware(_ok_app)
        async with _client(app) as client:
            response = await client.get("/mcp", headers={"Origin": "https://evil.example"})
        assert response.status_code == 403
