"""Tool handler for search_components.

Receives AppState, delegates to the DocumentationService, and returns a
structured dict. Search failures come back as an empty list, never an error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from mantinecontext.errors import ErrorCode, MantineContextError
from mantinecontext.models.tools import SearchComponentsInput, SearchComponentsOutput

if TYPE_CHECKING:
    from mantinecontext.state import AppState


async def handle(query: str, state: AppState) -> dict:
    """Handle a search_components tool call."""
    log = structlog.get_logger().bind(tool="search_components", query=query)
    log.info("handler_called")

    # Validate input
    try:
        validated = SearchComponentsInput(query=query)
    except ValueError as exc:
        raise MantineContextError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a non-empty search query (max 200 chars).",
            recoverable=False,
        ) from exc

    components = await state.service.search_components(validated.query)
    log.info("search_complete", match_count=len(components))

    output = SearchComponentsOutput(query=validated.query, components=components)
    return output.model_dump(mode="json")
