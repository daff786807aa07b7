"""Tool handler for get_component_docs.

Receives AppState, delegates to the DocumentationService, and returns the
requested section as JSON or Markdown. No MCP or FastMCP imports; server.py
handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from mantinecontext.errors import ErrorCode, MantineContextError
from mantinecontext.formatting import render_markdown, select_section
from mantinecontext.models.tools import GetComponentDocsInput, GetComponentDocsMarkdownOutput

if TYPE_CHECKING:
    from mantinecontext.state import AppState


async def handle(
    component: str,
    state: AppState,
    *,
    section: str = "all",
    force_refresh: bool = False,
    format: str = "json",
) -> dict:
    """Handle a get_component_docs tool call."""
    log = structlog.get_logger().bind(tool="get_component_docs", component=component)
    log.info("handler_called", section=section, format=format, force_refresh=force_refresh)

    # Validate input
    try:
        validated = GetComponentDocsInput(
            component=component,
            section=section,
            force_refresh=force_refresh,
            format=format,
        )
    except ValueError as exc:
        raise MantineContextError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion=(
                "Provide a component name such as 'Button' or 'text-input'; section must be "
                "props, examples, api or all; format must be json or markdown."
            ),
            recoverable=False,
        ) from exc

    # FetchFailure propagates to server.py
    doc = await state.service.get_documentation(
        validated.component, force_refresh=validated.force_refresh
    )

    if validated.format == "markdown":
        output = GetComponentDocsMarkdownOutput(
            name=doc.name,
            section=validated.section,
            content=render_markdown(doc, validated.section),
        )
        return output.model_dump(mode="json")

    return select_section(doc, validated.section).model_dump(mode="json")
