"""Shared test fixtures for the mantinecontext test suite."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from mantinecontext.cache import CacheStore
from mantinecontext.config import CacheSettings, Settings
from mantinecontext.errors import RenderError
from mantinecontext.models.docs import ComponentDoc, ExampleEntry, PropEntry

if TYPE_CHECKING:
    from pathlib import Path

BASE_URL = "https://mantine.dev"
BUTTON_URL = "https://mantine.dev/core/button"

# Rendered button page: one props row, one code block under a "Usage" heading,
# navigation links including self, a duplicate and off-site targets.
BUTTON_PAGE = """\
<html>
<body>
  <nav>
    <a href="/core/button">Button</a>
    <a href="/core/action-icon">ActionIcon</a>
    <a href="/core/action-icon">ActionIcon</a>
    <a href="https://mantine.dev/core/text-input">TextInput</a>
    <a href="https://github.com/mantinedev/mantine">GitHub</a>
    <a href="/hooks/use-disclosure">use-disclosure</a>
  </nav>
  <main>
    <h1 class="mantine-Title-root">Button</h1>
    <p>Button component to render button or link</p>
    <h2>Usage</h2>
    <pre class="mantine-Code-root">import { Button } from '@mantine/core';

function Demo() {
  return &lt;Button&gt;Button&lt;/Button&gt;;
}</pre>
    <table class="mantine-Table-root">
      <thead>
        <tr><th>Name</th><th>Type</th><th>Default</th><th>Description</th></tr>
      </thead>
      <tbody>
        <tr><td>onClick</td><td>() =&gt; void</td><td></td><td>Click handler</td></tr>
      </tbody>
    </table>
  </main>
</body>
</html>
"""


class FakeRenderer:
    """In-memory RendererProtocol: serves fixture HTML by URL and records calls."""

    def __init__(self, pages: dict[str, str] | None = None) -> None:
        self.pages: dict[str, str] = dict(pages or {})
        self.calls: list[str] = []
        self.error: Exception | None = None

    async def render(
        self,
        url: str,
        *,
        ready_selector: str | None = None,
        ready_timeout: float | None = None,
    ) -> str:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        if url not in self.pages:
            raise RenderError(url, "HTTP 404")
        return self.pages[url]


@pytest.fixture()
def button_page() -> str:
    return BUTTON_PAGE


@pytest.fixture()
def fake_renderer() -> FakeRenderer:
    """Renderer that knows the button page only."""
    return FakeRenderer({BUTTON_URL: BUTTON_PAGE})


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Default settings with the file cache redirected into tmp_path."""
    return Settings(cache=CacheSettings(dir=str(tmp_path / "cache")))


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache(tmp_path: Path, clock: FakeClock) -> CacheStore[ComponentDoc]:
    """CacheStore backed by a temporary directory and the fake clock."""
    return CacheStore(tmp_path / "cache", ComponentDoc, clock=clock)


@pytest.fixture()
def sample_doc() -> ComponentDoc:
    return ComponentDoc(
        name="Button",
        description="Button component to render button or link",
        props=[PropEntry(name="onClick", type="() => void", description="Click handler")],
        examples=[ExampleEntry(title="Usage", code="<Button>Button</Button>")],
        import_statement="import { Button } from '@mantine/core'",
        package_name="@mantine/core",
        version="7.16.2",
        url=BUTTON_URL,
        related_components=["ActionIcon"],
        last_fetched_at=datetime(2025, 1, 1, tzinfo=UTC),
    )
