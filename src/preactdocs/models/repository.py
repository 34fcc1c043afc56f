from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Repository(BaseModel):
    """Single entry of the static repository registry."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    readme_url: str = Field(alias="readmeUrl")
    docs_url: str | None = Field(default=None, alias="docsUrl")

    def to_public_dict(self) -> dict:
        """Registry shape exposed by list_preact_repositories."""
        return self.model_dump(by_alias=True, exclude_none=True)
