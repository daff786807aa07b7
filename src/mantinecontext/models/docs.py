from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, model_validator


class PropEntry(BaseModel):
    """Single row of a component's props table."""

    name: str
    type: str  # Free-text type signature, e.g. "() => void"
    default_value: str | None = None
    description: str = ""
    required: bool = False


class ExampleEntry(BaseModel):
    title: str
    code: str
    description: str | None = None


class ComponentDoc(BaseModel):
    """Normalised documentation record for one Mantine component."""

    name: str
    description: str = ""
    props: list[PropEntry] = []
    examples: list[ExampleEntry] = []
    import_statement: str
    package_name: str
    version: str
    url: str
    related_components: list[str] = []
    last_fetched_at: datetime

    @model_validator(mode="after")
    def _normalise_related(self) -> ComponentDoc:
        # No duplicates (first occurrence wins) and never the component itself
        seen: set[str] = set()
        related: list[str] = []
        for other in self.related_components:
            if other == self.name or other in seen:
                continue
            seen.add(other)
            related.append(other)
        self.related_components = related
        return self
