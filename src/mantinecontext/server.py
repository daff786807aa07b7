"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools
- Start the stdio transport
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent

import mantinecontext.tools.clear_docs_cache as t_clear_cache
import mantinecontext.tools.get_component_docs as t_get_docs
import mantinecontext.tools.list_components as t_list
import mantinecontext.tools.search_components as t_search
from mantinecontext import __version__
from mantinecontext.cache import CacheStore
from mantinecontext.catalog import ComponentCatalog
from mantinecontext.config import Settings
from mantinecontext.errors import MantineContextError
from mantinecontext.extractor import MantineExtractor
from mantinecontext.fetcher import ComponentFetcher, build_http_client
from mantinecontext.models.docs import ComponentDoc
from mantinecontext.renderer import PlaywrightRenderer
from mantinecontext.service import DocumentationService
from mantinecontext.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr; stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


def build_state(settings: Settings) -> AppState:
    """Wire every runtime component from settings."""
    http_client = build_http_client(settings.docs)
    renderer = PlaywrightRenderer(settings.renderer)

    cache: CacheStore[ComponentDoc] = CacheStore(settings.cache.dir, ComponentDoc)
    fetcher = ComponentFetcher(
        renderer,
        MantineExtractor(settings.docs.base_url),
        settings.docs.base_url,
    )
    catalog = ComponentCatalog(http_client, renderer, settings.docs)
    service = DocumentationService(settings, cache, fetcher, catalog)

    return AppState(settings=settings, service=service, http_client=http_client)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Create and tear down all shared resources for the server's lifetime."""
    settings = Settings()
    _setup_logging(settings)

    log.info(
        "server_starting",
        version=__version__,
        mantine_version=settings.docs.mantine_version,
    )

    state = build_state(settings)

    cache_config = settings.cache.documentation
    log.info(
        "server_started",
        version=__version__,
        cache_dir=settings.cache.dir,
        cache_ttl_ms=cache_config.ttl if cache_config is not None else None,
        cache_storage=cache_config.storage if cache_config is not None else "disabled",
    )

    try:
        yield state
    finally:
        if state.http_client is not None:
            await state.http_client.aclose()
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP("mantinecontext", lifespan=lifespan)
# FastMCP does not expose a version kwarg; set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


def _serialise_tool_error(error: MantineContextError) -> CallToolResult:
    """Convert a MantineContextError to the MCP tool error result envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_dict()))],
        isError=True,
    )


async def _run_tool(tool: str, call: Awaitable[dict]) -> object:
    try:
        return await call
    except MantineContextError as exc:
        log.warning(
            "tool_error",
            tool=tool,
            code=exc.code,
            message=exc.message,
            recoverable=exc.recoverable,
        )
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool=tool, exc_info=True)
        raise


@mcp.tool()
async def get_component_docs(
    component: str,
    ctx: Context,
    section: str = "all",
    force_refresh: bool = False,
    format: str = "json",
) -> object:
    """Get documentation for a Mantine component.

    section: props | examples | api | all. format: json | markdown.
    Set force_refresh to bypass the cache and re-fetch from mantine.dev.
    """
    state: AppState = ctx.request_context.lifespan_context
    return await _run_tool(
        "get_component_docs",
        t_get_docs.handle(
            component, state, section=section, force_refresh=force_refresh, format=format
        ),
    )


@mcp.tool()
async def search_components(query: str, ctx: Context) -> object:
    """Search mantine.dev for components matching a query."""
    state: AppState = ctx.request_context.lifespan_context
    return await _run_tool("search_components", t_search.handle(query, state))


@mcp.tool()
async def list_components(ctx: Context) -> object:
    """List all available Mantine components."""
    state: AppState = ctx.request_context.lifespan_context
    return await _run_tool("list_components", t_list.handle(state))


@mcp.tool()
async def clear_docs_cache(ctx: Context, component: str | None = None) -> object:
    """Clear cached documentation for one component, or for all components."""
    state: AppState = ctx.request_context.lifespan_context
    return await _run_tool("clear_docs_cache", t_clear_cache.handle(component, state))


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
