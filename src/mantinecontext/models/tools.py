from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, field_validator

_COMPONENT_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")

DocSection = Literal["props", "examples", "api", "all"]
DocFormat = Literal["json", "markdown"]


def _validate_component_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("component must not be empty")
    if len(v) > 100:
        raise ValueError("component must not exceed 100 characters")
    if not _COMPONENT_NAME_RE.match(v):
        raise ValueError(f"Invalid component name: {v!r}")
    return v


class GetComponentDocsInput(BaseModel):
    component: str
    section: DocSection = "all"
    force_refresh: bool = False
    format: DocFormat = "json"

    @field_validator("component")
    @classmethod
    def validate_component(cls, v: str) -> str:
        return _validate_component_name(v)


class GetComponentDocsMarkdownOutput(BaseModel):
    name: str
    section: DocSection
    content: str  # Markdown rendering of the requested section


class SearchComponentsInput(BaseModel):
    query: str

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("query must not be empty")
        if len(v) > 200:
            raise ValueError("query must not exceed 200 characters")
        return v


class SearchComponentsOutput(BaseModel):
    query: str
    components: list[str]


class ListComponentsOutput(BaseModel):
    components: list[str]


class ClearDocsCacheInput(BaseModel):
    component: str | None = None

    @field_validator("component")
    @classmethod
    def validate_component(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return _validate_component_name(v)


class ClearDocsCacheOutput(BaseModel):
    cleared: str  # Component name, or "all"
