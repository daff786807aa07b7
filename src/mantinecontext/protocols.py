"""Protocol interfaces for swappable components.

The fetcher, catalog and service reference these protocols, not the concrete
implementations. This allows:
- Tests to use fake renderers that return fixture HTML
- Extraction heuristics to be replaced without touching cache or orchestration code
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from mantinecontext.models.docs import ComponentDoc


class RendererProtocol(Protocol):
    """Interface for a page rendering session (headless browser)."""

    async def render(
        self,
        url: str,
        *,
        ready_selector: str | None = None,
        ready_timeout: float | None = None,
    ) -> str: ...


class ExtractorProtocol(Protocol):
    """Interface for turning rendered component-page HTML into a ComponentDoc."""

    def extract(self, html: str, component_name: str, *, version: str) -> ComponentDoc: ...
