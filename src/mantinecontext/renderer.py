"""Headless-browser rendering for JavaScript-built documentation pages.

Every ``render`` call owns its own Playwright driver and browser for exactly
the duration of the call; both are closed on every exit path, including
navigation errors and timeouts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from mantinecontext.errors import RenderError

if TYPE_CHECKING:
    from playwright.async_api import Page

    from mantinecontext.config import RendererSettings

log = structlog.get_logger()


class PlaywrightRenderer:
    """Renders a URL in headless Chromium and returns the final markup."""

    def __init__(self, settings: RendererSettings) -> None:
        self._settings = settings

    async def render(
        self,
        url: str,
        *,
        ready_selector: str | None = None,
        ready_timeout: float | None = None,
    ) -> str:
        """Navigate to ``url`` and return ``page.content()``.

        Waits for ``ready_selector`` (default from settings) for at most
        ``ready_timeout`` seconds; if it never appears the page is returned
        as-is. Raises RenderError when the browser cannot be launched, the
        navigation fails or times out, or the server answers with an error
        status.
        """
        selector = ready_selector if ready_selector is not None else self._settings.ready_selector
        timeout = ready_timeout if ready_timeout is not None else self._settings.ready_timeout_seconds

        try:
            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(
                    headless=self._settings.headless,
                    args=self._settings.launch_args,
                )
                try:
                    page = await browser.new_page()
                    response = await page.goto(
                        url,
                        wait_until="networkidle",
                        timeout=self._settings.navigation_timeout_seconds * 1000,
                    )
                    if response is not None and response.status >= 400:
                        raise RenderError(url, f"HTTP {response.status}")

                    await self._wait_until_ready(page, url, selector, timeout)
                    html = await page.content()
                finally:
                    await browser.close()
        except PlaywrightError as exc:
            raise RenderError(url, str(exc)) from exc

        log.info("render_complete", url=url, content_length=len(html))
        return html

    async def _wait_until_ready(self, page: Page, url: str, selector: str, timeout: float) -> None:
        if not selector:
            return
        try:
            await page.wait_for_selector(selector, timeout=timeout * 1000)
        except PlaywrightTimeoutError:
            # Not fatal: extract whatever content the page has
            log.info("render_ready_timeout", url=url, selector=selector, timeout=timeout)
