"""Shared test fixtures for the preactdocs test suite."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from preactdocs.cache import CacheStore
from preactdocs.models.repository import Repository
from preactdocs.registry import RepositoryRegistry

SAMPLE_FEED = """\
# Preact

> Fast 3kB alternative to React with the same modern API.

---

**Description:** Learn how to manage local state with hooks

# useState

The useState hook is used to add state to function components. It returns the
current value and a setter.

```jsx
const [count, setCount] = useState(0);
```

---

**Description:** Getting started with Preact in minutes

## Getting Started

This tutorial walks through creating your first component.

---

**Description:** Reference for the render function

## API Reference

`render(vnode, parent)` mounts a tree. See `hydrate(vnode, parent)` for SSR.

---

**Description:** Reactive primitives for fine-grained updates

## Signals

A signal allows you to hold a value that updates components automatically.
"""


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(clock: FakeClock) -> CacheStore:
    return CacheStore(ttl_seconds=300, clock=clock)


@pytest.fixture()
def sample_feed() -> str:
    return SAMPLE_FEED


@pytest.fixture()
def sample_repositories() -> list[Repository]:
    """Primary repository with a docs feed, one secondary with, one without."""
    return [
        Repository(
            name="preact",
            description="The README for the core Preact library",
            readme_url="https://raw.example.com/preact/README.md",
            docs_url="https://docs.example.com/llms.txt",
        ),
        Repository(
            name="@preact/signals",
            description="The README for the Preact Signals bindings for Preact",
            readme_url="https://raw.example.com/signals/README.md",
            docs_url="https://docs.example.com/llms.txt",
        ),
        Repository(
            name="htm",
            description="The README for the HTM library used with Preact",
            readme_url="https://raw.example.com/htm/README.md",
        ),
    ]


@pytest.fixture()
def registry(sample_repositories: list[Repository]) -> RepositoryRegistry:
    return RepositoryRegistry(sample_repositories, primary="preact")
