from __future__ import annotations

from pydantic import BaseModel, ValidationInfo, field_validator

DEFAULT_MAX_QUERY_LENGTH = 500


class GetReadmeInput(BaseModel):
    repository: str

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("repository must not be empty")
        return v


class QueryDocsInput(BaseModel):
    query: str
    repository: str = "preact"
    include_examples: bool = True

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str, info: ValidationInfo) -> str:
        v = v.strip()
        if not v:
            raise ValueError("query must not be empty")
        limit = (info.context or {}).get("max_query_length", DEFAULT_MAX_QUERY_LENGTH)
        if len(v) > limit:
            raise ValueError(f"query must be at most {limit} characters")
        return v

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("repository must not be empty")
        return v
