"""Tool handler for clear_docs_cache."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from mantinecontext.errors import ErrorCode, MantineContextError
from mantinecontext.models.tools import ClearDocsCacheInput, ClearDocsCacheOutput

if TYPE_CHECKING:
    from mantinecontext.state import AppState


async def handle(component: str | None, state: AppState) -> dict:
    """Handle a clear_docs_cache tool call.

    With a component name, drops that component's entry for the configured
    Mantine version; without one, empties the whole documentation cache.
    """
    log = structlog.get_logger().bind(tool="clear_docs_cache", component=component)
    log.info("handler_called")

    try:
        validated = ClearDocsCacheInput(component=component)
    except ValueError as exc:
        raise MantineContextError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a component name such as 'Button', or omit it to clear everything.",
            recoverable=False,
        ) from exc

    await state.service.clear_cache(validated.component)

    output = ClearDocsCacheOutput(cleared=validated.component or "all")
    return output.model_dump(mode="json")
