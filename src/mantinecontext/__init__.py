"""MantineContext: MCP server for cached, structured Mantine component documentation."""

from __future__ import annotations

import warnings
from importlib.metadata import PackageNotFoundError, version

_DIST_NAME = "mantinecontext"
_UNKNOWN_VERSION = "0.0.0+unknown"


def _installed_version() -> str:
    """Version reported in the MCP initialize handshake and startup logs."""
    try:
        return version(_DIST_NAME)
    except PackageNotFoundError:
        # Running from a source checkout that was never installed
        warnings.warn(
            f"Package metadata for {_DIST_NAME!r} not found; "
            f"using fallback version {_UNKNOWN_VERSION!r}.",
            RuntimeWarning,
            stacklevel=2,
        )
        return _UNKNOWN_VERSION


__version__ = _installed_version()
