"""Integration test fixtures.

Provides a fully wired AppState with a real CacheStore on tmp_path, a real
httpx client (mocked per test with respx) and the in-memory FakeRenderer in
place of the headless browser. Page fixtures come from tests/conftest.py.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import httpx
import pytest

from mantinecontext.cache import CacheStore
from mantinecontext.catalog import ComponentCatalog
from mantinecontext.extractor import MantineExtractor
from mantinecontext.fetcher import ComponentFetcher
from mantinecontext.models.docs import ComponentDoc
from mantinecontext.service import DocumentationService
from mantinecontext.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

    from mantinecontext.config import Settings
    from tests.conftest import FakeRenderer


@pytest.fixture()
def subprocess_env(tmp_path: Path) -> dict[str, str]:
    """Baseline env dict for subprocess-based MCP integration tests.

    Points the documentation cache at an isolated tmp directory and the
    search endpoint at an unroutable address so nothing reaches mantine.dev.
    """
    env = os.environ.copy()
    env["MANTINECONTEXT__CACHE__DIR"] = str(tmp_path / "cache")
    env["MANTINECONTEXT__DOCS__BASE_URL"] = "http://127.0.0.1:1"
    env["MANTINECONTEXT__LOGGING__LEVEL"] = "WARNING"
    return env


@pytest.fixture()
async def app_state(settings: Settings, fake_renderer: FakeRenderer) -> AsyncGenerator[AppState, None]:
    """Full AppState wired for tool handler tests."""
    base_url = settings.docs.base_url
    cache: CacheStore[ComponentDoc] = CacheStore(settings.cache.dir, ComponentDoc)

    async with httpx.AsyncClient() as client:
        fetcher = ComponentFetcher(fake_renderer, MantineExtractor(base_url), base_url)
        catalog = ComponentCatalog(client, fake_renderer, settings.docs)
        service = DocumentationService(settings, cache, fetcher, catalog)

        yield AppState(settings=settings, service=service, http_client=client)
