"""In-memory documentation cache with per-entry TTL and a capacity bound.

All operations are synchronous, so under the single event loop no other task
can observe a half-finished read or write. Internal failures are caught and
degrade gracefully: ``get`` reports a miss, ``set`` returns ``False``.
Infrastructure errors never cross the DocumentCache class boundary; they are
logged with ``exc_info=True`` so they remain observable via stderr.

When a write would push the live key count past ``max_entries``, expired
entries are swept first and then an existing entry is evicted. Which entry is
evicted is an implementation detail (currently the oldest insertion); callers
must not rely on it.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, TypeVar

import structlog
from pydantic import BaseModel

from godoc_mcp.models.cache import CacheEntry, CacheStats

if TYPE_CHECKING:
    from collections.abc import Callable

log = structlog.get_logger()

T = TypeVar("T")


def _approx_size(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, str | bytes):
        return len(value)
    if isinstance(value, BaseModel):
        return len(value.model_dump_json(exclude_none=True))
    if isinstance(value, list | tuple):
        return sum(_approx_size(item) for item in value)
    return len(repr(value))


class DocumentCache:
    """String-keyed TTL cache for fetched documentation."""

    def __init__(
        self,
        default_ttl: int = 3600,
        max_entries: int = 1000,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = default_ttl
        self._max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry[Any]] = {}
        self._hits = 0
        self._misses = 0
        self._ksize = 0
        self._vsize = 0

    @property
    def default_ttl(self) -> int:
        return self._default_ttl

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, key: str) -> Any | None:
        """Return the cached payload, or ``None`` on miss, expiry, or failure."""
        try:
            entry = self._live_entry(key)
            if entry is None:
                self._misses += 1
                log.debug("cache_miss", key=key)
                return None
            self._hits += 1
            log.debug("cache_hit", key=key)
            return entry.data
        except Exception:
            self._misses += 1
            log.warning("cache_read_error", key=key, exc_info=True)
            return None

    def has(self, key: str) -> bool:
        return self._live_entry(key) is not None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set(self, key: str, value: T, ttl: int | None = None) -> bool:
        """Store ``value`` under ``key``. Returns ``False`` on failure, never raises."""
        effective_ttl = ttl or self._default_ttl
        try:
            entry: CacheEntry[T] = CacheEntry(
                data=value, timestamp=self._clock(), ttl=effective_ttl
            )
            # Everything that can fail runs before the store is touched
            size = _approx_size(value)
            if key in self._entries:
                self._remove(key)
            else:
                self._make_room()
            self._entries[key] = entry
            self._ksize += len(key)
            self._vsize += size
            log.debug("cache_set", key=key, ttl=effective_ttl)
            return True
        except Exception:
            log.warning("cache_write_error", key=key, exc_info=True)
            return False

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns True iff an entry was removed."""
        if key not in self._entries:
            return False
        self._remove(key)
        log.debug("cache_delete", key=key)
        return True

    def clear(self) -> None:
        """Drop every entry and reset all counters."""
        self._entries.clear()
        self._hits = 0
        self._misses = 0
        self._ksize = 0
        self._vsize = 0
        log.info("cache_cleared")

    def get_stats(self) -> CacheStats:
        self._purge_expired()
        return CacheStats(
            keys=len(self._entries),
            hits=self._hits,
            misses=self._misses,
            ksize=self._ksize,
            vsize=self._vsize,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _live_entry(self, key: str) -> CacheEntry[Any] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._remove(key)
            log.debug("cache_expired", key=key)
            return None
        return entry

    def _remove(self, key: str) -> None:
        entry = self._entries.pop(key)
        self._ksize -= len(key)
        self._vsize -= _approx_size(entry.data)

    def _purge_expired(self) -> None:
        now = self._clock()
        for key in [k for k, e in self._entries.items() if e.is_expired(now)]:
            self._remove(key)
            log.debug("cache_expired", key=key)

    def _make_room(self) -> None:
        if len(self._entries) < self._max_entries:
            return
        self._purge_expired()
        while len(self._entries) >= self._max_entries:
            victim = next(iter(self._entries))
            self._remove(victim)
            log.debug("cache_evicted", key=victim)
