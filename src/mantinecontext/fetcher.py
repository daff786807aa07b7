"""Network access for documentation retrieval.

Two kinds of I/O live here:
- ``build_http_client`` creates the shared httpx client used for the remote
  search endpoint. The lifespan owns the client lifecycle.
- ``ComponentFetcher`` runs the render-and-extract pipeline for one component
  page, turning rendering failures into FetchFailure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from mantinecontext.errors import FetchFailure, RenderError
from mantinecontext.extractor import component_url, normalize_component_name

if TYPE_CHECKING:
    from mantinecontext.config import DocsSettings
    from mantinecontext.models.docs import ComponentDoc
    from mantinecontext.protocols import ExtractorProtocol, RendererProtocol

log = structlog.get_logger()


def build_http_client(settings: DocsSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(15.0),
        headers={"User-Agent": settings.user_agent},
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
        ),
    )


class ComponentFetcher:
    """Renders a component's documentation page and extracts a ComponentDoc from it."""

    def __init__(
        self,
        renderer: RendererProtocol,
        extractor: ExtractorProtocol,
        base_url: str,
    ) -> None:
        self._renderer = renderer
        self._extractor = extractor
        self._base_url = base_url

    async def fetch(self, component_name: str, *, version: str) -> ComponentDoc:
        """Render and extract. Raises FetchFailure; never returns a partial record."""
        name = normalize_component_name(component_name)
        url = component_url(self._base_url, name)
        log.info("component_fetch_started", component=name, url=url)

        try:
            html = await self._renderer.render(url)
        except RenderError as exc:
            log.warning("component_fetch_failed", component=name, url=url, reason=exc.reason)
            raise FetchFailure(name, exc.reason) from exc

        doc = self._extractor.extract(html, name, version=version)
        log.info(
            "component_fetch_complete",
            component=name,
            props=len(doc.props),
            examples=len(doc.examples),
        )
        return doc
