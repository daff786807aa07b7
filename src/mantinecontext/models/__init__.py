from __future__ import annotations

from mantinecontext.models.cache import CacheConfig, CacheEntry
from mantinecontext.models.docs import ComponentDoc, ExampleEntry, PropEntry
from mantinecontext.models.outcome import Fallback, Ok, Outcome
from mantinecontext.models.tools import (
    ClearDocsCacheInput,
    ClearDocsCacheOutput,
    GetComponentDocsInput,
    GetComponentDocsMarkdownOutput,
    ListComponentsOutput,
    SearchComponentsInput,
    SearchComponentsOutput,
)

__all__ = [
    # docs
    "ComponentDoc",
    "PropEntry",
    "ExampleEntry",
    # cache
    "CacheConfig",
    "CacheEntry",
    # outcome
    "Ok",
    "Fallback",
    "Outcome",
    # tools
    "GetComponentDocsInput",
    "GetComponentDocsMarkdownOutput",
    "SearchComponentsInput",
    "SearchComponentsOutput",
    "ListComponentsOutput",
    "ClearDocsCacheInput",
    "ClearDocsCacheOutput",
]
