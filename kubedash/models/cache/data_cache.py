"""Short-lived cache for best-effort enrichment lookups."""

from __future__ import annotations

import asyncio
import time
from typing import Any

from kubedash.constants.limits import CACHE_MAX_ENTRIES


class DataCache:
    """TTL-based cache shared by concurrent polling sessions.

    The usage panel, the pods-capacity sampler and the node detail panel all
    need the node list on roughly the same cadence; caching it briefly keeps
    them from issuing the same list call several times per cycle. Core
    screen lists are never served from here.

    Reads are lock-free (asyncio is single-threaded and reads do not mutate);
    writes take the lock so interleaved coroutines cannot corrupt eviction.
    """

    TTL_SECONDS: dict[str, float] = {
        "nodes": 8.0,
        "namespace_names": 30.0,
    }
    DEFAULT_TTL_SECONDS = 5.0

    def __init__(self, max_entries: int | None = None) -> None:
        self._cache: dict[str, dict[str, Any]] = {}
        self._lock = asyncio.Lock()
        self._max_entries = max_entries or CACHE_MAX_ENTRIES

    def _ttl_for(self, key: str, entry: dict[str, Any]) -> float:
        ttl = entry.get("ttl")
        if ttl is not None:
            return ttl
        base_key = key.split(":", 1)[0]
        return self.TTL_SECONDS.get(base_key, self.DEFAULT_TTL_SECONDS)

    def _is_expired(self, key: str, entry: dict[str, Any]) -> bool:
        return time.monotonic() - entry["timestamp"] > self._ttl_for(key, entry)

    async def get(self, key: str) -> Any:
        """Return cached data, or None if absent or expired."""
        entry = self._cache.get(key)
        if entry is None or self._is_expired(key, entry):
            return None
        return entry["data"]

    async def set(self, key: str, data: Any, ttl: float | None = None) -> None:
        async with self._lock:
            self._cache[key] = {"data": data, "timestamp": time.monotonic(), "ttl": ttl}
            if len(self._cache) > self._max_entries:
                self._evict_expired_then_oldest()

    def _evict_expired_then_oldest(self) -> None:
        """Must be called under lock."""
        for key in [k for k, entry in self._cache.items() if self._is_expired(k, entry)]:
            del self._cache[key]
        while len(self._cache) > self._max_entries:
            oldest_key = min(self._cache, key=lambda k: self._cache[k]["timestamp"])
            del self._cache[oldest_key]

    async def clear(self, key: str | None = None) -> None:
        """Clear one key or everything (e.g. on context switch)."""
        async with self._lock:
            if key:
                self._cache.pop(key, None)
            else:
                self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
