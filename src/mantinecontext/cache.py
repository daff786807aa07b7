"""Two-tier documentation cache: an in-process dict fronting one JSON file per key.

Validity is decided identically on both tiers: an entry is served only if the
TTL is non-zero, its version tag matches the caller's current version, and it
is younger than the TTL. A valid file entry is promoted into memory before it
is returned.

File-tier failures are degraded, never raised: read failures (missing,
unreadable or unparseable files) are a cache miss, write failures are logged
and ignored because the memory write has already happened. Errors are logged
with ``exc_info=True`` so they remain observable via stderr. Infrastructure
errors never cross the CacheStore class boundary.
"""

from __future__ import annotations

import asyncio
import hashlib
import os
import re
import secrets
from contextlib import suppress
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Generic, TypeVar

import structlog
from pydantic import ValidationError

from mantinecontext.models.cache import CacheEntry

if TYPE_CHECKING:
    from collections.abc import Callable

    from mantinecontext.models.cache import CacheConfig

log = structlog.get_logger()

T = TypeVar("T")

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9]")
_KEY_HASH_LENGTH = 16


def cache_filename(key: str) -> str:
    """Map a cache key to its file name.

    ``'component_doc_Button_7.16.2'`` → ``'component_doc_Button_7_16_2-<sha256[:16]>.json'``.
    The readable prefix collapses punctuation to ``_``; the hash suffix keeps
    keys that differ only in punctuation on separate files.
    """
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:_KEY_HASH_LENGTH]
    return f"{_UNSAFE_KEY_CHARS.sub('_', key)}-{digest}.json"


def is_valid_entry(
    entry: CacheEntry,
    ttl_ms: int,
    current_version: str,
    now: datetime,
) -> bool:
    """Return True if the entry may be served under the given TTL and version."""
    if ttl_ms == 0:
        return False
    if entry.version != current_version:
        return False
    timestamp = entry.timestamp
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return now - timestamp < timedelta(milliseconds=ttl_ms)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CacheStore(Generic[T]):
    """Memory + file cache for values of one type.

    ``data_type`` is used to validate payloads read back from disk, so a file
    entry is returned as the same type that was written.
    """

    def __init__(
        self,
        directory: Path | str,
        data_type: type[T],
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._dir = Path(directory).expanduser()
        self._entry_model = CacheEntry[data_type]  # type: ignore[valid-type]
        self._memory: dict[str, CacheEntry[T]] = {}
        self._clock = clock or _utcnow

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, key: str) -> Path:
        return self._dir / cache_filename(key)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get(self, key: str, config: CacheConfig, current_version: str) -> T | None:
        """Return the cached value, or ``None`` on miss, expiry, version mismatch or read failure."""
        now = self._clock()

        entry = self._memory.get(key)
        if entry is not None and is_valid_entry(entry, config.ttl, current_version, now):
            log.debug("cache_hit", key=key, tier="memory")
            return entry.data

        if config.storage != "file":
            return None

        entry = await asyncio.to_thread(self._read_file, key)
        if entry is None:
            return None
        if not is_valid_entry(entry, config.ttl, current_version, now):
            log.debug("cache_entry_invalid", key=key, tier="file", version=entry.version)
            return None

        self._memory[key] = entry
        log.debug("cache_hit", key=key, tier="file")
        return entry.data

    def _read_file(self, key: str) -> CacheEntry[T] | None:
        path = self.path_for(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError):
            log.warning("cache_read_error", key=key, path=str(path), exc_info=True)
            return None

        try:
            return self._entry_model.model_validate_json(raw)
        except ValidationError:
            log.warning(
                "cache_read_error", key=key, path=str(path), reason="unparseable", exc_info=True
            )
            return None

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def set(self, key: str, value: T, config: CacheConfig, version: str) -> None:
        """Write a value. The memory write always succeeds; file failures are non-fatal."""
        entry = self._entry_model(data=value, timestamp=self._clock(), version=version)
        self._memory[key] = entry

        if config.storage != "file":
            return

        try:
            await asyncio.to_thread(self._write_file, key, entry)
        except (OSError, ValueError):
            log.warning("cache_write_error", key=key, path=str(self.path_for(key)), exc_info=True)

    def _write_file(self, key: str, entry: CacheEntry[T]) -> None:
        """Replace the key's file atomically so concurrent writers never interleave."""
        payload = entry.model_dump_json()
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        tmp_path = path.with_name(f"{path.name}.{secrets.token_hex(4)}.tmp")
        try:
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, path)
        finally:
            with suppress(OSError):
                tmp_path.unlink(missing_ok=True)

    # ------------------------------------------------------------------
    # Clear
    # ------------------------------------------------------------------

    async def clear(self, key: str, config: CacheConfig) -> None:
        """Remove one key from both tiers. A missing file is not an error."""
        self._memory.pop(key, None)

        if config.storage != "file":
            return

        try:
            await asyncio.to_thread(self.path_for(key).unlink, missing_ok=True)
        except OSError:
            log.warning("cache_clear_error", key=key, exc_info=True)

    async def clear_all(self, config: CacheConfig) -> None:
        """Empty the memory tier and, with file storage, every file in the cache directory."""
        self._memory.clear()

        if config.storage != "file":
            log.info("cache_cleared", files_deleted=0)
            return

        try:
            deleted = await asyncio.to_thread(self._delete_all_files)
        except OSError:
            log.warning("cache_clear_error", key="*", exc_info=True)
            return
        log.info("cache_cleared", files_deleted=deleted)

    def _delete_all_files(self) -> int:
        if not self._dir.is_dir():
            return 0
        deleted = 0
        for path in self._dir.iterdir():
            if path.is_file():
                path.unlink(missing_ok=True)
                deleted += 1
        return deleted
