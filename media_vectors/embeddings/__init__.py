"""
Embeddings Module: Batch Utilities for Embedding Vectors

Provides:
    - EmbeddingPooler / pool_embeddings: mean, max, sum, weighted pooling
    - EmbeddingStats: per-dimension mean, std_dev, min, max
    - compute_centroid, reduce_dimensions
    - BatchProcessor: named batch operations
"""

from media_vectors.embeddings.pooling import (
    EmbeddingPooler,
    compute_centroid,
    pool_embeddings,
    reduce_dimensions,
    split_batch,
)
from media_vectors.embeddings.stats import EmbeddingStats
from media_vectors.embeddings.batch import BatchProcessor

__all__ = [
    "EmbeddingPooler",
    "pool_embeddings",
    "compute_centroid",
    "reduce_dimensions",
    "split_batch",
    "EmbeddingStats",
    "BatchProcessor",
]
