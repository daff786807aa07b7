from __future__ import annotations

from datetime import datetime
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class CacheConfig(BaseModel):
    """TTL and storage tier for one family of cached values."""

    ttl: int = Field(ge=0)  # Milliseconds; 0 disables caching (every read misses)
    storage: Literal["memory", "file"] = "memory"  # "file" = memory fronting one file per key


class CacheEntry(BaseModel, Generic[T]):
    """A cached payload stamped with its creation time and source version.

    Never mutated: every write to a key replaces the entry wholesale.
    """

    model_config = ConfigDict(frozen=True)

    data: T
    timestamp: datetime
    version: str
