"""
Core Type Definitions: Metrics, Strategies and Search Results

Vectors themselves are plain 1-D float32 numpy arrays; anything array-like
(list of floats, tuple, ndarray) is accepted at the API boundary and copied
into float32 storage owned by the receiving container.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Sequence, TypeAlias, Union

import numpy as np

from media_vectors.core.errors import ConfigError, Err, Ok, Result

# Type alias for vector input
VectorLike: TypeAlias = Union[np.ndarray, Sequence[float]]


# =============================================================================
# METRIC TYPES
# =============================================================================
class DistanceMetric(Enum):
    """
    Distance/similarity metrics for vector comparison.

    Fixed when an index is constructed. Determines whether vectors are
    normalized on the way in and which direction results are sorted.
    """
    COSINE = "cosine"           # Dot product over unit-length vectors
    EUCLIDEAN = "euclidean"     # L2 distance
    MANHATTAN = "manhattan"     # L1 distance
    DOT_PRODUCT = "dotproduct"  # Unnormalized inner product

    def is_similarity(self) -> bool:
        """True if higher values = more similar."""
        return self in (DistanceMetric.COSINE, DistanceMetric.DOT_PRODUCT)

    def is_distance(self) -> bool:
        """True if lower values = more similar."""
        return self in (DistanceMetric.EUCLIDEAN, DistanceMetric.MANHATTAN)

    def requires_normalization(self) -> bool:
        """True if stored and query vectors are scaled to unit length."""
        return self is DistanceMetric.COSINE

    @classmethod
    def parse(cls, name: Union[str, "DistanceMetric"]) -> Result["DistanceMetric", ConfigError]:
        """Resolve a metric from its name (case-insensitive)."""
        if isinstance(name, DistanceMetric):
            return Ok(name)
        metric = _METRIC_ALIASES.get(str(name).strip().lower())
        if metric is None:
            return Err(ConfigError.unknown_metric(str(name)))
        return Ok(metric)


_METRIC_ALIASES: dict[str, DistanceMetric] = {
    "cosine": DistanceMetric.COSINE,
    "euclidean": DistanceMetric.EUCLIDEAN,
    "l2": DistanceMetric.EUCLIDEAN,
    "manhattan": DistanceMetric.MANHATTAN,
    "l1": DistanceMetric.MANHATTAN,
    "dotproduct": DistanceMetric.DOT_PRODUCT,
    "dot_product": DistanceMetric.DOT_PRODUCT,
    "dot": DistanceMetric.DOT_PRODUCT,
    "ip": DistanceMetric.DOT_PRODUCT,
}


class PoolingStrategy(Enum):
    """Aggregate used to combine a batch of embeddings into one vector."""
    MEAN = "mean"
    MAX = "max"
    SUM = "sum"
    WEIGHTED = "weighted"   # Needs explicit weights; falls back to MEAN

    @classmethod
    def parse(cls, name: Union[str, "PoolingStrategy"]) -> Result["PoolingStrategy", ConfigError]:
        if isinstance(name, PoolingStrategy):
            return Ok(name)
        try:
            return Ok(cls(str(name).strip().lower()))
        except ValueError:
            return Err(ConfigError.unknown_strategy(str(name)))


# =============================================================================
# SEARCH RESULT: SINGLE MATCH
# =============================================================================
@dataclass(frozen=True, slots=True)
class SearchResult:
    """
    Single search hit.

    Attributes:
        id: Insertion position of the vector in its index
        score: Metric value (higher = closer for cosine/dot product,
            lower = closer for euclidean/manhattan)
    """
    id: int
    score: float

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "score": self.score}


# =============================================================================
# SEARCH RESULTS: BATCH RESPONSE
# =============================================================================
@dataclass(slots=True)
class SearchResults:
    """
    Ranked matches plus the time spent producing them.

    Attributes:
        matches: Ordered SearchResult list, best first
        query_time_ms: Wall time of the search call
    """
    matches: list[SearchResult] = field(default_factory=list)
    query_time_ms: float = 0.0

    def __len__(self) -> int:
        return len(self.matches)

    def __iter__(self) -> Iterator[SearchResult]:
        return iter(self.matches)

    def __getitem__(self, idx: int) -> SearchResult:
        return self.matches[idx]

    @property
    def ids(self) -> list[int]:
        return [m.id for m in self.matches]

    @property
    def scores(self) -> list[float]:
        return [m.score for m in self.matches]

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON/API response."""
        return {
            "results": [m.to_dict() for m in self.matches],
            "query_time_ms": self.query_time_ms,
        }


# =============================================================================
# STATISTICS
# =============================================================================
@dataclass(frozen=True, slots=True)
class IndexStats:
    """Runtime statistics for a VectorIndex."""
    size: int
    dimension: int
    metric: DistanceMetric

    @property
    def index_size_bytes(self) -> int:
        """Raw float32 payload held by the index."""
        return self.size * self.dimension * 4

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "dimension": self.dimension,
            "metric": self.metric.value,
            "index_size_bytes": self.index_size_bytes,
        }


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Occupancy of a ResultCache."""
    size: int
    max_size: int

    def to_dict(self) -> dict[str, Any]:
        return {"size": self.size, "max_size": self.max_size}
