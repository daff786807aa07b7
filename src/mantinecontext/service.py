"""Documentation service: the single entry point used by the tool handlers.

Orchestrates cache key → cache lookup → render-and-extract on miss → cache
write-back. Stateless per call apart from the in-flight fetch table; all
durable state lives in the CacheStore. Settings are read on every call.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from mantinecontext.extractor import normalize_component_name
from mantinecontext.models.cache import CacheConfig
from mantinecontext.models.outcome import Fallback

if TYPE_CHECKING:
    from mantinecontext.cache import CacheStore
    from mantinecontext.catalog import ComponentCatalog
    from mantinecontext.config import Settings
    from mantinecontext.fetcher import ComponentFetcher
    from mantinecontext.models.docs import ComponentDoc

log = structlog.get_logger()


def documentation_cache_key(component_name: str, version: str) -> str:
    return f"component_doc_{component_name}_{version}"


class DocumentationService:
    """Serves ComponentDoc records through the two-tier cache."""

    def __init__(
        self,
        settings: Settings,
        cache: CacheStore[ComponentDoc],
        fetcher: ComponentFetcher,
        catalog: ComponentCatalog,
    ) -> None:
        self.settings = settings
        self._cache = cache
        self._fetcher = fetcher
        self._catalog = catalog
        # key → fetch task shared by concurrent callers for the same key
        self._inflight: dict[str, asyncio.Task[ComponentDoc]] = {}

    async def get_documentation(
        self, component_name: str, force_refresh: bool = False
    ) -> ComponentDoc:
        """Return documentation for a component, fetching it on cache miss.

        Raises FetchFailure when the page cannot be rendered; stale or
        placeholder data is never returned in that case.
        """
        name = normalize_component_name(component_name)
        version = self.settings.docs.mantine_version
        cache_config = self.settings.cache.documentation
        key = documentation_cache_key(name, version)
        call_log = log.bind(component=name, key=key)

        if not force_refresh and cache_config is not None:
            cached = await self._cache.get(key, cache_config, version)
            if cached is not None:
                call_log.info("cache_hit")
                return cached

        call_log.info("cache_miss_fetching", force_refresh=force_refresh)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._fetch_and_store(key, name, version, cache_config))
            self._inflight[key] = task
            task.add_done_callback(lambda done: self._forget_inflight(key, done))
        else:
            call_log.info("fetch_joined_inflight")

        # Shielded so that one caller giving up does not cancel the fetch for the others
        return await asyncio.shield(task)

    async def _fetch_and_store(
        self,
        key: str,
        name: str,
        version: str,
        cache_config: CacheConfig | None,
    ) -> ComponentDoc:
        doc = await self._fetcher.fetch(name, version=version)
        if cache_config is not None:
            await self._cache.set(key, doc, cache_config, version)
        return doc

    def _forget_inflight(self, key: str, task: asyncio.Task[ComponentDoc]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # Mark the exception retrieved even if every waiter was cancelled
        if not task.cancelled():
            task.exception()

    async def search_components(self, query: str) -> list[str]:
        """Never raises; an empty list when the search endpoint fails."""
        outcome = await self._catalog.search(query)
        if isinstance(outcome, Fallback):
            log.info("search_fallback_used", query=query, reason=outcome.reason)
        return outcome.data

    async def list_all_components(self) -> list[str]:
        """Never raises; the embedded catalog when navigation cannot be read."""
        outcome = await self._catalog.list_all()
        if isinstance(outcome, Fallback):
            log.info("listing_fallback_used", reason=outcome.reason, count=len(outcome.data))
        return outcome.data

    async def clear_cache(self, component_name: str | None = None) -> None:
        """Drop one component's entry for the current version, or the whole cache."""
        # With caching disabled there may still be files from an earlier configuration
        cache_config = self.settings.cache.documentation or CacheConfig(ttl=0, storage="file")

        if component_name is None:
            await self._cache.clear_all(cache_config)
            return

        name = normalize_component_name(component_name)
        key = documentation_cache_key(name, self.settings.docs.mantine_version)
        await self._cache.clear(key, cache_config)
        log.info("cache_entry_cleared", component=name, key=key)
