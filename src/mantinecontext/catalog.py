"""Component discovery: remote search and navigation listing.

Neither operation raises. Failures are recovered locally and reported as
``Fallback`` results (empty list for search, the embedded catalog for
listing); the successful path returns ``Ok``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlparse

import httpx
import structlog
from bs4 import BeautifulSoup

from mantinecontext.errors import RenderError
from mantinecontext.extractor import core_segment, name_from_slug
from mantinecontext.models.outcome import Fallback, Ok

if TYPE_CHECKING:
    from mantinecontext.config import DocsSettings
    from mantinecontext.models.outcome import Outcome
    from mantinecontext.protocols import RendererProtocol

log = structlog.get_logger()

# Served when the navigation cannot be read. Not exhaustive and not tied to a
# Mantine release; it only guarantees list_components never comes back empty.
FALLBACK_COMPONENTS: tuple[str, ...] = (
    "Accordion", "ActionIcon", "Affix", "Alert", "Anchor",
    "AppShell", "AspectRatio", "Autocomplete", "Avatar",
    "Badge", "Blockquote", "Box", "Breadcrumbs", "Burger", "Button",
    "Card", "Carousel", "Center", "Checkbox", "Chip", "Code", "Collapse",
    "ColorInput", "ColorPicker", "Container",
    "DateInput", "DatePicker", "DatePickerInput", "DateTimePicker", "Divider", "Drawer", "Dropzone",
    "FileInput", "Flex", "FocusTrap",
    "Grid", "Group",
    "Highlight",
    "Image", "Indicator", "Input",
    "JsonInput",
    "Kbd",
    "List", "Loader",
    "Mark", "Menu", "Modal", "MultiSelect",
    "NativeSelect", "Notification", "NumberInput",
    "Overlay",
    "Pagination", "Paper", "PasswordInput", "Pill", "PinInput", "Popover", "Portal", "Progress",
    "Radio", "RangeSlider", "Rating", "RingProgress",
    "ScrollArea", "SegmentedControl", "Select", "SimpleGrid", "Skeleton", "Slider", "Space",
    "Spoiler", "Stack", "Stepper", "Switch",
    "Table", "Tabs", "Text", "Textarea", "TextInput", "ThemeIcon", "Timeline", "Title", "Tooltip",
    "UnstyledButton",
)  # fmt: skip

_NAV_READY_SELECTOR = 'a[href^="/core/"]'


class ComponentCatalog:
    """Lists and searches Mantine components."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        renderer: RendererProtocol,
        settings: DocsSettings,
    ) -> None:
        self._client = client
        self._renderer = renderer
        self._settings = settings

    async def search(self, query: str) -> Outcome[list[str]]:
        """Query the site's search endpoint and keep component results only."""
        url = f"{self._settings.base_url.rstrip('/')}{self._settings.search_path}"
        try:
            response = await self._client.get(url, params={"query": query})
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            log.warning("component_search_failed", query=query, reason="transport", error=str(exc))
            return Fallback([], reason=f"transport: {exc}")
        except ValueError as exc:
            log.warning("component_search_failed", query=query, reason="invalid_json", error=str(exc))
            return Fallback([], reason=f"invalid_json: {exc}")

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            log.warning("component_search_failed", query=query, reason="unexpected_shape")
            return Fallback([], reason="unexpected_shape")

        names = [
            result["title"]
            for result in results
            if isinstance(result, dict)
            and result.get("type") == "component"
            and isinstance(result.get("title"), str)
        ]
        log.info("component_search_complete", query=query, count=len(names))
        return Ok(names)

    async def list_all(self) -> Outcome[list[str]]:
        """Enumerate component pages from the rendered site navigation."""
        url = f"{self._settings.base_url.rstrip('/')}{self._settings.listing_path}"
        try:
            html = await self._renderer.render(url, ready_selector=_NAV_READY_SELECTOR)
        except RenderError as exc:
            log.warning("component_listing_failed", url=url, reason=exc.reason)
            return self._fallback(exc.reason)
        except Exception as exc:
            log.warning("component_listing_failed", url=url, reason="unexpected", exc_info=True)
            return self._fallback(f"unexpected: {exc}")

        names = self._navigation_names(html)
        if not names:
            log.warning("component_listing_failed", url=url, reason="no_component_links")
            return self._fallback("no_component_links")

        log.info("component_listing_complete", count=len(names))
        return Ok(names)

    def _navigation_names(self, html: str) -> list[str]:
        base_host = urlparse(self._settings.base_url).netloc
        soup = BeautifulSoup(html, "html.parser")
        seen: set[str] = set()
        names: list[str] = []
        for anchor in soup.select("a[href]"):
            href = anchor.get("href")
            if not isinstance(href, str):
                continue
            slug = core_segment(href, base_host)
            if slug is None:
                continue
            name = name_from_slug(slug)
            if name not in seen:
                seen.add(name)
                names.append(name)
        return names

    def _fallback(self, reason: str) -> Fallback[list[str]]:
        return Fallback(list(FALLBACK_COMPONENTS), reason=reason)
