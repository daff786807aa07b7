"""Tool handler for list_components."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from mantinecontext.models.tools import ListComponentsOutput

if TYPE_CHECKING:
    from mantinecontext.state import AppState


async def handle(state: AppState) -> dict:
    """Handle a list_components tool call. Never raises."""
    log = structlog.get_logger().bind(tool="list_components")
    log.info("handler_called")

    components = await state.service.list_all_components()
    log.info("list_complete", count=len(components))

    return ListComponentsOutput(components=components).model_dump(mode="json")
