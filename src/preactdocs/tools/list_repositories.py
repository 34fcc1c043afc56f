"""Tool handler for list_preact_repositories.

No MCP or FastMCP imports — server.py handles the MCP wiring.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from preactdocs.state import AppState


async def handle(state: AppState) -> str:
    """Return the registry as indented JSON text."""
    log = structlog.get_logger().bind(tool="list_preact_repositories")
    log.info("handler_called")
    repositories = [repo.to_public_dict() for repo in state.registry.list()]
    return json.dumps(repositories, indent=2)
