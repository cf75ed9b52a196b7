"""
Vector Search Engine: String-Configured Facade over VectorIndex

What a binding layer or service wraps:
    - metric chosen by name ("cosine", "euclidean", "manhattan", "dotproduct")
    - search results timed and serializable
    - optional read-through ResultCache in front of search

Usage:
    engine = VectorSearchEngine.create(384, "cosine", cache_size=50).unwrap()
    engine.add_batch(flat_vectors, count=1000)
    payload = engine.cached_search(query, k=10).unwrap()   # JSON string
"""

from __future__ import annotations

import hashlib
import json
import time
from typing import Any, Optional, Union

import numpy as np

from media_vectors.cache.result_cache import ResultCache
from media_vectors.core.config import CacheConfig, EngineSettings, IndexConfig
from media_vectors.core.errors import ConfigError, Err, Ok, Result, VectorSearchError
from media_vectors.core.types import DistanceMetric, SearchResults, VectorLike
from media_vectors.index.distance import as_vector
from media_vectors.index.flat import VectorIndex
from media_vectors.observability.logging import get_logger

log = get_logger("media_vectors.engine")


def query_cache_key(query: VectorLike, k: int) -> str:
    """SHA1 over k and the float32 bytes of the query."""
    digest = hashlib.sha1(str(k).encode())
    digest.update(as_vector(query).tobytes())
    return digest.hexdigest()


class VectorSearchEngine:
    """
    VectorIndex plus timing, stats and an optional result cache.

    The cache is cleared on every mutation of the index, so a cached
    payload always reflects the current contents.
    """

    __slots__ = ("_index", "_cache")

    def __init__(self, index: VectorIndex, cache: Optional[ResultCache] = None) -> None:
        self._index = index
        self._cache = cache

    @classmethod
    def create(
        cls,
        dimension: int,
        metric: Union[str, DistanceMetric] = "cosine",
        cache_size: int = 0,
    ) -> Result["VectorSearchEngine", ConfigError]:
        """
        Build an engine from plain values.

        Args:
            dimension: Vector length
            metric: Metric name or DistanceMetric
            cache_size: Result cache capacity; 0 disables caching
        """
        parsed = DistanceMetric.parse(metric)
        if parsed.is_err():
            return parsed

        config = IndexConfig(dimension=dimension, metric=parsed.unwrap())
        if error_msg := config.validate():
            return Err(ConfigError.invalid("dimension", dimension, error_msg))
        if cache_size < 0:
            return Err(ConfigError.invalid("cache_size", cache_size, "must be >= 0"))

        cache = None
        if cache_size:
            cache_result = ResultCache.from_config(CacheConfig(max_size=cache_size))
            if cache_result.is_err():
                return cache_result
            cache = cache_result.unwrap()
        log.info(
            "Search engine created",
            dimension=dimension,
            metric=config.metric.value,
            cache_size=cache_size,
        )
        return Ok(cls(VectorIndex.from_config(config), cache))

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> Result["VectorSearchEngine", ConfigError]:
        return cls.create(settings.dimension, settings.metric, settings.cache_size)

    @property
    def index(self) -> VectorIndex:
        return self._index

    @property
    def cache(self) -> Optional[ResultCache]:
        return self._cache

    # =========================================================================
    # MUTATION
    # =========================================================================
    def _invalidate(self) -> None:
        if self._cache is not None:
            self._cache.clear()

    def add(self, vector: VectorLike) -> Result[int, VectorSearchError]:
        result = self._index.add_vector(vector)
        if result.is_ok():
            self._invalidate()
        return result

    def add_batch(self, vectors: VectorLike, count: int) -> Result[list[int], VectorSearchError]:
        result = self._index.add_vectors_batch(vectors, count)
        if result.is_ok():
            self._invalidate()
        return result

    def clear(self) -> None:
        self._index.clear()
        self._invalidate()

    def get_vector(self, id: int) -> Optional[np.ndarray]:
        return self._index.get_vector(id)

    # =========================================================================
    # SEARCH
    # =========================================================================
    def search(self, query: VectorLike, k: int) -> Result[SearchResults, VectorSearchError]:
        start_time = time.perf_counter()
        result = self._index.search(query, k)
        if result.is_err():
            return result

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        return Ok(SearchResults(matches=result.unwrap(), query_time_ms=elapsed_ms))

    def cached_search(self, query: VectorLike, k: int) -> Result[str, VectorSearchError]:
        """
        Search through the result cache.

        Returns:
            JSON array of {"id", "score"} objects, best first
        """
        key = query_cache_key(query, k)
        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                log.debug("Cache hit", key=key)
                return Ok(cached)

        result = self.search(query, k)
        if result.is_err():
            return result

        payload = json.dumps([m.to_dict() for m in result.unwrap()])
        if self._cache is not None:
            self._cache.set(key, payload)
        return Ok(payload)

    # =========================================================================
    # STATS
    # =========================================================================
    def stats(self) -> dict[str, Any]:
        stats = self._index.stats().to_dict()
        if self._cache is not None:
            stats["cache"] = self._cache.stats().to_dict()
        return stats

    def stats_json(self) -> str:
        return json.dumps(self.stats())
