"""
Result Cache: Bounded Key -> Serialized Result Mapping

Read-through cache for expensive ranking/search calls, keyed by the query.

Semantics:
    - At most one entry per key; set() replaces an existing entry
    - Each set() stamps the entry with clock()
    - Over capacity, the single entry with the smallest timestamp is evicted
      (oldest inserted or updated; reads do not refresh it)
    - No TTL: values never expire on their own

Sized for tens of entries; get() and eviction are linear scans.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

from media_vectors.core.config import CacheConfig
from media_vectors.core.errors import ConfigError, Err, Ok, Result
from media_vectors.core.types import CacheStats
from media_vectors.observability.logging import get_logger

log = get_logger("media_vectors.cache")


class ResultCache:
    """
    Timestamp-ordered bounded cache of serialized results.

    Usage:
        cache = ResultCache(max_size=50)
        cached = cache.get(query_key)
        if cached is None:
            cached = json.dumps(run_search(query))
            cache.set(query_key, cached)
    """

    __slots__ = ("_max_size", "_entries", "_clock")

    def __init__(
        self,
        max_size: int = 100,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._max_size = max_size
        # (key, value, timestamp) in insertion order
        self._entries: list[tuple[str, str, float]] = []
        self._clock = clock

    @classmethod
    def from_config(
        cls,
        config: CacheConfig,
        clock: Callable[[], float] = time.time,
    ) -> Result["ResultCache", ConfigError]:
        if error_msg := config.validate():
            return Err(ConfigError.invalid("max_size", config.max_size, error_msg))
        return Ok(cls(max_size=config.max_size, clock=clock))

    @property
    def max_size(self) -> int:
        return self._max_size

    def get(self, key: str) -> Optional[str]:
        """Stored value for key, or None. Does not touch the timestamp."""
        for cached_key, value, _ in self._entries:
            if cached_key == key:
                return value
        return None

    def set(self, key: str, value: str) -> None:
        self._entries = [entry for entry in self._entries if entry[0] != key]
        self._entries.append((key, value, self._clock()))

        if len(self._entries) > self._max_size:
            # min() keeps the first of equal timestamps, i.e. insertion order
            oldest = min(range(len(self._entries)), key=lambda i: self._entries[i][2])
            evicted_key = self._entries.pop(oldest)[0]
            log.debug("Cache entry evicted", key=evicted_key, size=len(self._entries))

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> CacheStats:
        return CacheStats(size=len(self._entries), max_size=self._max_size)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return any(entry[0] == key for entry in self._entries)
