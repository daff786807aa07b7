"""Section filtering and Markdown rendering for ComponentDoc records.

Pure functions used by the get_component_docs tool handler.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mantinecontext.models.docs import ComponentDoc
    from mantinecontext.models.tools import DocSection


def select_section(doc: ComponentDoc, section: DocSection) -> ComponentDoc:
    """Return a copy of ``doc`` reduced to the requested section.

    ``props`` drops examples and related components, ``examples`` drops props
    and related components, ``api`` drops props and examples, ``all`` returns
    the record unchanged.
    """
    if section == "props":
        return doc.model_copy(update={"examples": [], "related_components": []})
    if section == "examples":
        return doc.model_copy(update={"props": [], "related_components": []})
    if section == "api":
        return doc.model_copy(update={"props": [], "examples": []})
    return doc


def render_markdown(doc: ComponentDoc, section: DocSection = "all") -> str:
    parts: list[str] = [f"# {doc.name}\n"]

    if section in ("all", "api"):
        parts.append("## Overview\n")
        parts.append(f"{doc.description}\n")
        parts.append("### Import\n")
        parts.append(f"```typescript\n{doc.import_statement}\n```\n")
        if doc.related_components:
            parts.append("### Related Components\n")
            parts.append("\n".join(f"- {related}" for related in doc.related_components) + "\n")

    if section in ("all", "props"):
        parts.append("## Props\n")
        if doc.props:
            rows = [
                "| Property | Type | Default | Description | Required |",
                "| -------- | ---- | ------- | ----------- | -------- |",
            ]
            for prop in doc.props:
                rows.append(
                    f"| {_escape_cell(prop.name)} | `{_escape_cell(prop.type)}` "
                    f"| {_escape_cell(prop.default_value or '-')} "
                    f"| {_escape_cell(prop.description)} | {'Yes' if prop.required else 'No'} |"
                )
            parts.append("\n".join(rows) + "\n")
        else:
            parts.append("No props documentation available.\n")

    if section in ("all", "examples"):
        parts.append("## Examples\n")
        if doc.examples:
            for example in doc.examples:
                parts.append(f"### {example.title}\n")
                if example.description:
                    parts.append(f"{example.description}\n")
                parts.append(f"```tsx\n{example.code}\n```\n")
        else:
            parts.append("No examples available.\n")

    return "\n".join(parts)


def _escape_cell(text: str) -> str:
    # Pipes inside union types would otherwise split the table row
    return text.replace("|", "\\|")
