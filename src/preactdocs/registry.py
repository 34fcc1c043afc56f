"""Static registry of the Preact ecosystem repositories.

The registry is fixed for the process lifetime. Names are the only valid
``repository`` argument to the retrieval operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from preactdocs.errors import NotFoundError
from preactdocs.models.repository import Repository

if TYPE_CHECKING:
    from collections.abc import Iterable

PRIMARY_REPOSITORY = "preact"

_RAW = "https://raw.githubusercontent.com"
_LLMS_TXT = "https://preactjs.com/llms.txt"

PACKAGES: tuple[Repository, ...] = (
    Repository(
        name="preact",
        description="The README for the core Preact library",
        readme_url=f"{_RAW}/preactjs/preact/main/README.md",
        docs_url=_LLMS_TXT,
    ),
    Repository(
        name="preact-iso",
        description="The README for the Preact ISO library",
        readme_url=f"{_RAW}/preactjs/preact-iso/main/README.md",
    ),
    Repository(
        name="@preact/signals-core",
        description="The README for the core Signals library",
        readme_url=f"{_RAW}/preactjs/signals/main/packages/core/README.md",
        docs_url=_LLMS_TXT,
    ),
    Repository(
        name="@preact/signals",
        description="The README for the Preact Signals bindings for Preact",
        readme_url=f"{_RAW}/preactjs/signals/main/packages/preact/README.md",
        docs_url=_LLMS_TXT,
    ),
    Repository(
        name="@preact/signals-react",
        description="The README for the Preact Signals bindings for React",
        readme_url=f"{_RAW}/preactjs/signals/main/packages/react/README.md",
    ),
    Repository(
        name="@preact/preset-vite",
        description="The README for the Preact Vite preset",
        readme_url=f"{_RAW}/preactjs/preset-vite/main/README.md",
    ),
    Repository(
        name="create-preact",
        description="The README for the Create Preact app tool",
        readme_url=f"{_RAW}/preactjs/create-preact/main/README.md",
    ),
    Repository(
        name="playwright-ct",
        description="The README for the Playwright component testing integration for Preact",
        readme_url=f"{_RAW}/preactjs/playwright-ct/main/README.md",
    ),
    Repository(
        name="vitest-browser-preact",
        description="The README for the Vitest browser Preact integration",
        readme_url=f"{_RAW}/jovidecroock/vitest-browser-preact/main/README.md",
    ),
    Repository(
        name="htm",
        description="The README for the HTM library used with Preact",
        readme_url=f"{_RAW}/developit/htm/master/README.md",
    ),
)


class RepositoryRegistry:
    """Ordered, name-indexed view over the repository descriptors."""

    def __init__(
        self,
        repositories: Iterable[Repository] = PACKAGES,
        *,
        primary: str = PRIMARY_REPOSITORY,
    ) -> None:
        self._ordered = tuple(repositories)
        self._by_name = {repo.name: repo for repo in self._ordered}
        self.primary = primary

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> Repository:
        """Resolve a descriptor by name. Raises NotFoundError for unknown names."""
        repo = self._by_name.get(name)
        if repo is None:
            raise NotFoundError(name)
        return repo

    def list(self) -> list[Repository]:
        return list(self._ordered)

    def names(self) -> list[str]:
        return [repo.name for repo in self._ordered]

    def is_primary(self, name: str) -> bool:
        return name == self.primary
