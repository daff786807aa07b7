"""Unit tests for mantinecontext.fetcher."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mantinecontext.config import DocsSettings
from mantinecontext.errors import ErrorCode, FetchFailure, RenderError
from mantinecontext.extractor import MantineExtractor
from mantinecontext.fetcher import ComponentFetcher, build_http_client

if TYPE_CHECKING:
    from tests.conftest import FakeRenderer

BASE_URL = "https://mantine.dev"


@pytest.fixture()
def fetcher(fake_renderer: FakeRenderer) -> ComponentFetcher:
    return ComponentFetcher(fake_renderer, MantineExtractor(BASE_URL), BASE_URL)


class TestComponentFetcher:
    async def test_fetch_renders_component_page(
        self, fetcher: ComponentFetcher, fake_renderer: FakeRenderer
    ) -> None:
        doc = await fetcher.fetch("button", version="7.16.2")

        assert fake_renderer.calls == ["https://mantine.dev/core/button"]
        assert doc.name == "Button"
        assert doc.version == "7.16.2"
        assert len(doc.props) == 1

    async def test_kebab_case_name_maps_to_slug(
        self, fetcher: ComponentFetcher, fake_renderer: FakeRenderer
    ) -> None:
        fake_renderer.pages["https://mantine.dev/core/text-input"] = "<html></html>"
        doc = await fetcher.fetch("text-input", version="7.16.2")

        assert fake_renderer.calls == ["https://mantine.dev/core/text-input"]
        assert doc.name == "TextInput"

    async def test_render_error_becomes_fetch_failure(self, fetcher: ComponentFetcher) -> None:
        with pytest.raises(FetchFailure) as exc_info:
            await fetcher.fetch("unknown", version="7.16.2")

        error = exc_info.value
        assert error.code == ErrorCode.COMPONENT_FETCH_FAILED
        assert error.component_name == "Unknown"
        assert error.recoverable is True
        assert "Unknown" in error.message
        assert isinstance(error.__cause__, RenderError)
        assert error.__cause__.url == "https://mantine.dev/core/unknown"

    async def test_renderer_failure_propagates_reason(
        self, fetcher: ComponentFetcher, fake_renderer: FakeRenderer
    ) -> None:
        fake_renderer.error = RenderError("https://mantine.dev/core/button", "net::ERR_NAME_NOT_RESOLVED")

        with pytest.raises(FetchFailure) as exc_info:
            await fetcher.fetch("Button", version="7.16.2")

        assert exc_info.value.cause == "net::ERR_NAME_NOT_RESOLVED"


class TestBuildHttpClient:
    async def test_client_configuration(self) -> None:
        client = build_http_client(DocsSettings(user_agent="TestAgent/0.1"))
        try:
            assert client.headers["User-Agent"] == "TestAgent/0.1"
            assert client.follow_redirects is True
        finally:
            await client.aclose()
