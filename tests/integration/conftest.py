"""Integration test fixtures.

Provides a fully wired AppState with a mocked HTTP client and a fake clock.
Registry fixtures come from tests/conftest.py.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import httpx
import pytest

from preactdocs.config import Settings
from preactdocs.state import AppState, create_app_state

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from preactdocs.cache import CacheStore
    from preactdocs.registry import RepositoryRegistry


@pytest.fixture()
def subprocess_env() -> dict[str, str]:
    """Baseline env for subprocess-based MCP tests: stdio, quiet logging."""
    env = os.environ.copy()
    env["PREACTDOCS__SERVER__TRANSPORT"] = "stdio"
    env["PREACTDOCS__LOGGING__LEVEL"] = "WARNING"
    return env


@pytest.fixture()
async def app_state(
    registry: RepositoryRegistry, cache: CacheStore
) -> AsyncGenerator[AppState, None]:
    async with httpx.AsyncClient() as client:
        yield create_app_state(Settings(), client, registry=registry, cache=cache)
