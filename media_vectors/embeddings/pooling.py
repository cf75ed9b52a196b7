"""
Embedding Pooling: Combine a Batch of Vectors into One

Strategies (per dimension, across the batch):
    MEAN      arithmetic mean
    MAX       maximum, accumulated from -inf
    SUM       sum
    WEIGHTED  Σ wᵢvᵢ / Σ wᵢ with caller-supplied weights; without weights
              it falls back to MEAN and logs a warning

Inputs are flat row-major buffers of count * dimension floats, the same
layout VectorIndex.add_vectors_batch consumes.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from media_vectors.core.config import PoolingConfig
from media_vectors.core.errors import BatchError, ConfigError, Err, Ok, Result
from media_vectors.core.types import PoolingStrategy, VectorLike
from media_vectors.index.distance import as_vector, normalize_vector
from media_vectors.observability.logging import get_logger

log = get_logger("media_vectors.embeddings")

PoolingError = Union[BatchError, ConfigError]


def split_batch(
    embeddings: VectorLike,
    dimension: int,
    count: Optional[int] = None,
) -> Result[np.ndarray, BatchError]:
    """Reshape a flat buffer into [count, dimension], validating its length."""
    flat = as_vector(embeddings)
    if dimension < 1:
        return Err(BatchError.invalid_batch_size(len(flat), dimension))
    if count is None:
        if len(flat) == 0 or len(flat) % dimension != 0:
            return Err(BatchError.invalid_batch_size(len(flat), dimension))
        count = len(flat) // dimension
    elif count < 1 or len(flat) != count * dimension:
        return Err(BatchError.invalid_batch_size(len(flat), dimension, expected=count * dimension))
    return Ok(flat.reshape(count, dimension))


def pool_embeddings(
    embeddings: VectorLike,
    count: int,
    dimension: int,
    strategy: PoolingStrategy = PoolingStrategy.MEAN,
    normalize: bool = True,
    weights: Optional[Sequence[float]] = None,
) -> Result[np.ndarray, PoolingError]:
    """
    Pool count embeddings of length dimension into a single vector.

    Args:
        embeddings: Flat buffer of count * dimension floats
        count: Number of embeddings in the buffer
        dimension: Length of each embedding
        strategy: Aggregate to apply per dimension
        normalize: Scale the pooled vector to unit length
        weights: Per-embedding weights, used by WEIGHTED only

    Returns:
        Pooled float32 vector of length dimension
    """
    rows = split_batch(embeddings, dimension, count)
    if rows.is_err():
        return rows
    matrix = rows.unwrap()

    if strategy is PoolingStrategy.MEAN:
        pooled = matrix.sum(axis=0) / np.float32(count)
    elif strategy is PoolingStrategy.MAX:
        pooled = np.full(dimension, -np.inf, dtype=np.float32)
        np.maximum(pooled, matrix.max(axis=0), out=pooled)
    elif strategy is PoolingStrategy.SUM:
        pooled = matrix.sum(axis=0)
    elif strategy is PoolingStrategy.WEIGHTED:
        if weights is None:
            log.warning("Weighted pooling without weights, using mean", count=count)
            pooled = matrix.sum(axis=0) / np.float32(count)
        else:
            w = np.asarray(weights, dtype=np.float32).reshape(-1)
            if len(w) != count:
                return Err(BatchError.invalid_batch_size(len(w), 1, expected=count))
            total = float(w.sum())
            if total == 0.0:
                return Err(ConfigError.invalid("weights", total, "weights must not sum to zero"))
            pooled = (w @ matrix) / np.float32(total)
    else:
        return Err(ConfigError.unknown_strategy(str(strategy)))

    pooled = pooled.astype(np.float32)
    if normalize:
        pooled = normalize_vector(pooled)
    return Ok(pooled)


def compute_centroid(embeddings: VectorLike, dimension: int) -> Result[np.ndarray, BatchError]:
    """Mean vector of a flat buffer; the count is inferred from its length."""
    rows = split_batch(embeddings, dimension)
    if rows.is_err():
        return rows
    matrix = rows.unwrap()
    return Ok((matrix.sum(axis=0) / np.float32(len(matrix))).astype(np.float32))


def reduce_dimensions(
    embeddings: VectorLike,
    original_dim: int,
    target_dim: int,
) -> Result[np.ndarray, PoolingError]:
    """
    Truncate every embedding to its first target_dim components.

    Returns:
        Flat buffer of count * target_dim floats
    """
    if target_dim < 1 or target_dim > original_dim:
        return Err(ConfigError.invalid(
            "target_dim", target_dim, f"must be in [1, {original_dim}]",
        ))
    rows = split_batch(embeddings, original_dim)
    if rows.is_err():
        return rows
    return Ok(np.ascontiguousarray(rows.unwrap()[:, :target_dim]).reshape(-1))


class EmbeddingPooler:
    """
    Pooler bound to a dimension, strategy and normalization flag.

    Usage:
        pooler = EmbeddingPooler(PoolingConfig(dimension=384))
        vector = pooler.pool(chunk_embeddings, count=4).unwrap()
    """

    __slots__ = ("_config",)

    def __init__(self, config: Optional[PoolingConfig] = None) -> None:
        self._config = config or PoolingConfig()

    @property
    def config(self) -> PoolingConfig:
        return self._config

    @property
    def dimension(self) -> int:
        return self._config.dimension

    def pool(
        self,
        embeddings: VectorLike,
        count: int,
        weights: Optional[Sequence[float]] = None,
    ) -> Result[np.ndarray, PoolingError]:
        return pool_embeddings(
            embeddings,
            count,
            self._config.dimension,
            strategy=self._config.strategy,
            normalize=self._config.normalize,
            weights=weights,
        )
