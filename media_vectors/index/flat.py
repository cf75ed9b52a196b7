"""
Exact Vector Index (Linear Scan)

Every query is scored against every stored vector, then the full result set
is sorted and truncated to k. No graph or tree structure: results are exact
and deterministic.

Ordering:
    - COSINE / DOT_PRODUCT: descending score (higher = more similar)
    - EUCLIDEAN / MANHATTAN: ascending score (lower = more similar)
    - Ties keep insertion order (stable sort)

Complexity:
    - add_vector: O(d)
    - search: O(n × d) scoring + O(n log n) sort

Thread Safety:
    None. One index per worker, or an external lock around mutation.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from media_vectors.core.config import IndexConfig
from media_vectors.core.errors import (
    BatchError,
    ConfigError,
    Err,
    IndexError,
    Ok,
    Result,
)
from media_vectors.core.types import (
    DistanceMetric,
    IndexStats,
    SearchResult,
    VectorLike,
)
from media_vectors.index.distance import (
    as_vector,
    compute_scores,
    cosine_similarity_batch,
    normalize_vector,
)
from media_vectors.observability.logging import get_logger

log = get_logger("media_vectors.index")


def rank_scores(scores: np.ndarray, metric: DistanceMetric, k: int) -> list[SearchResult]:
    """
    Order scores for metric and keep the best k.

    Stable sort on the (possibly negated) scores, so equal scores keep the
    insertion order of their vectors.
    """
    if k <= 0 or len(scores) == 0:
        return []
    keys = -scores if metric.is_similarity() else scores
    order = np.argsort(keys, kind="stable")[:k]
    return [SearchResult(id=int(i), score=float(scores[i])) for i in order]


# =============================================================================
# VECTOR INDEX
# =============================================================================
class VectorIndex:
    """
    In-memory exact nearest-neighbor index.

    Identifiers are zero-based insertion positions, stable until clear().
    Deletion of single vectors is not supported.

    Usage:
        index = VectorIndex(dimension=3, metric=DistanceMetric.COSINE)
        index.add_vector([1.0, 0.0, 0.0])
        results = index.search([1.0, 0.0, 0.0], k=2).unwrap()
    """

    __slots__ = ("_dimension", "_metric", "_vectors", "_matrix")

    def __init__(
        self,
        dimension: int,
        metric: DistanceMetric = DistanceMetric.COSINE,
    ) -> None:
        self._dimension = dimension
        self._metric = metric
        self._vectors: list[np.ndarray] = []
        # Stacked view of _vectors, rebuilt lazily after inserts
        self._matrix: Optional[np.ndarray] = None

    @classmethod
    def from_config(cls, config: IndexConfig) -> "VectorIndex":
        return cls(dimension=config.dimension, metric=config.metric)

    # =========================================================================
    # PROPERTIES
    # =========================================================================
    @property
    def metric(self) -> DistanceMetric:
        return self._metric

    def dimension(self) -> int:
        """Vector dimensionality."""
        return self._dimension

    def size(self) -> int:
        """Number of stored vectors; also the next id to assign."""
        return len(self._vectors)

    def __len__(self) -> int:
        return len(self._vectors)

    # =========================================================================
    # INSERT
    # =========================================================================
    def _prepare(self, vector: np.ndarray) -> np.ndarray:
        if self._metric.requires_normalization():
            return normalize_vector(vector)
        return vector

    def add_vector(self, vector: VectorLike) -> Result[int, IndexError]:
        """
        Insert single vector.

        The stored copy is normalized for COSINE; the caller's vector is
        never modified.

        Returns:
            Id of the new vector (size() - 1)
        """
        vec = as_vector(vector)
        if len(vec) != self._dimension:
            return Err(IndexError.dimension_mismatch(self._dimension, len(vec)))

        self._vectors.append(self._prepare(vec))
        self._matrix = None
        return Ok(len(self._vectors) - 1)

    def add_vectors_batch(
        self,
        flat_vectors: VectorLike,
        count: int,
    ) -> Result[list[int], IndexError]:
        """
        Insert count vectors packed row-major into one flat buffer.

        The buffer length is checked against count * dimension before any
        vector is stored, so a rejected batch leaves the index unchanged.

        Returns:
            Ids assigned, in buffer order
        """
        flat = as_vector(flat_vectors)
        expected = count * self._dimension
        if count < 0 or len(flat) != expected:
            return Err(IndexError.dimension_mismatch(expected, len(flat)))

        ids: list[int] = []
        for row in flat.reshape(count, self._dimension):
            result = self.add_vector(row)
            if result.is_err():
                return result
            ids.append(result.unwrap())

        log.debug("Batch inserted", count=count, size=len(self._vectors))
        return Ok(ids)

    # =========================================================================
    # SEARCH
    # =========================================================================
    def _stacked(self) -> np.ndarray:
        if self._matrix is None:
            self._matrix = np.vstack(self._vectors)
        return self._matrix

    def search(
        self,
        query: VectorLike,
        k: int,
    ) -> Result[list[SearchResult], Union[IndexError, ConfigError]]:
        """
        Find the k nearest stored vectors.

        Args:
            query: Query vector of length dimension()
            k: Number of results; 0 yields [], k > size() yields everything

        Returns:
            SearchResult list ordered best first
        """
        query_vec = as_vector(query)
        if len(query_vec) != self._dimension:
            return Err(IndexError.dimension_mismatch(self._dimension, len(query_vec)))
        if k < 0:
            return Err(ConfigError.invalid("k", k, "must be >= 0"))

        if not self._vectors:
            return Ok([])

        query_vec = self._prepare(query_vec)
        scores = compute_scores(self._metric, query_vec, self._stacked())
        results = rank_scores(scores, self._metric, min(k, len(self._vectors)))

        log.debug(
            "Search completed",
            metric=self._metric.value,
            candidates=len(self._vectors),
            returned=len(results),
        )
        return Ok(results)

    # =========================================================================
    # ACCESS / MAINTENANCE
    # =========================================================================
    def get_vector(self, id: int) -> Optional[np.ndarray]:
        """Copy of the stored vector (normalized for COSINE), or None."""
        if id < 0 or id >= len(self._vectors):
            return None
        return self._vectors[id].copy()

    def clear(self) -> None:
        """Drop every vector; previously issued ids become invalid."""
        dropped = len(self._vectors)
        self._vectors.clear()
        self._matrix = None
        log.debug("Index cleared", dropped=dropped)

    def stats(self) -> IndexStats:
        return IndexStats(
            size=len(self._vectors),
            dimension=self._dimension,
            metric=self._metric,
        )

    def __repr__(self) -> str:
        return (
            f"VectorIndex(dimension={self._dimension}, "
            f"metric={self._metric.value}, size={len(self._vectors)})"
        )


# =============================================================================
# FLAT BUFFER HELPERS
# =============================================================================
def _split_rows(
    vectors: VectorLike,
    dimension: int,
) -> Result[np.ndarray, BatchError]:
    flat = as_vector(vectors)
    if dimension < 1 or len(flat) % dimension != 0:
        return Err(BatchError.invalid_batch_size(len(flat), dimension))
    return Ok(flat.reshape(-1, dimension))


def batch_cosine_similarity(
    query: VectorLike,
    vectors: VectorLike,
    dimension: int,
) -> Result[np.ndarray, Union[BatchError, IndexError]]:
    """
    Cosine similarity of query against each row of a flat buffer.

    Unlike the index, nothing is pre-normalized here: both sides are
    normalized on the fly, and zero vectors score 0.
    """
    rows = _split_rows(vectors, dimension)
    if rows.is_err():
        return rows
    query_vec = as_vector(query)
    if len(query_vec) != dimension:
        return Err(IndexError.dimension_mismatch(dimension, len(query_vec)))
    matrix = rows.unwrap()
    if len(matrix) == 0:
        return Ok(np.zeros(0, dtype=np.float32))
    return Ok(cosine_similarity_batch(normalize_vector(query_vec), normalize_vector(matrix)))


def knn_search(
    query: VectorLike,
    vectors: VectorLike,
    dimension: int,
    k: int,
) -> Result[list[SearchResult], Union[BatchError, IndexError]]:
    """
    One-shot cosine kNN over a flat buffer without building an index.

    Returns:
        Top min(k, n) results, highest similarity first, ties by position
    """
    scores = batch_cosine_similarity(query, vectors, dimension)
    if scores.is_err():
        return scores
    return Ok(rank_scores(scores.unwrap(), DistanceMetric.COSINE, max(k, 0)))
