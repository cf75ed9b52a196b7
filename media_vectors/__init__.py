"""
media_vectors: Exact In-Memory Vector Search for Media Search

Features:
    - Linear-scan k-nearest-neighbor index (cosine, euclidean, manhattan,
      dot product) with deterministic, stable ranking
    - 8-bit quantized vector store (4x smaller than float32)
    - Embedding pooling (mean, max, sum, weighted) and per-dimension stats
    - Bounded read-through result cache

Usage:
    from media_vectors import VectorIndex, DistanceMetric

    index = VectorIndex(dimension=3, metric=DistanceMetric.COSINE)
    index.add_vector([1.0, 0.0, 0.0])
    index.add_vector([0.9, 0.1, 0.0])

    for hit in index.search([1.0, 0.0, 0.0], k=2).unwrap():
        print(hit.id, hit.score)
"""

from __future__ import annotations

__version__ = "0.1.0"

from media_vectors.core.types import (
    VectorLike,
    DistanceMetric,
    PoolingStrategy,
    SearchResult,
    SearchResults,
    IndexStats,
    CacheStats,
)
from media_vectors.core.errors import (
    Result,
    Ok,
    Err,
    ErrorCode,
    VectorSearchError,
    IndexError,
    BatchError,
    ConfigError,
)
from media_vectors.core.config import (
    IndexConfig,
    CompressionConfig,
    PoolingConfig,
    CacheConfig,
    EngineSettings,
)
from media_vectors.index import (
    VectorIndex,
    knn_search,
    batch_cosine_similarity,
    cosine_similarity,
    dot_product,
    euclidean_distance,
    manhattan_distance,
    normalize_vector,
    vector_magnitude,
)
from media_vectors.storage import CompressedVectorStore
from media_vectors.embeddings import (
    EmbeddingPooler,
    EmbeddingStats,
    BatchProcessor,
    pool_embeddings,
    compute_centroid,
    reduce_dimensions,
)
from media_vectors.cache import ResultCache
from media_vectors.engine import VectorSearchEngine
from media_vectors.observability import setup_logging, LogLevel

__all__ = [
    # Version
    "__version__",
    # Core types
    "VectorLike",
    "DistanceMetric",
    "PoolingStrategy",
    "SearchResult",
    "SearchResults",
    "IndexStats",
    "CacheStats",
    # Error handling
    "Result",
    "Ok",
    "Err",
    "ErrorCode",
    "VectorSearchError",
    "IndexError",
    "BatchError",
    "ConfigError",
    # Config
    "IndexConfig",
    "CompressionConfig",
    "PoolingConfig",
    "CacheConfig",
    "EngineSettings",
    # Index
    "VectorIndex",
    "knn_search",
    "batch_cosine_similarity",
    "cosine_similarity",
    "dot_product",
    "euclidean_distance",
    "manhattan_distance",
    "normalize_vector",
    "vector_magnitude",
    # Storage
    "CompressedVectorStore",
    # Embeddings
    "EmbeddingPooler",
    "EmbeddingStats",
    "BatchProcessor",
    "pool_embeddings",
    "compute_centroid",
    "reduce_dimensions",
    # Cache / engine
    "ResultCache",
    "VectorSearchEngine",
    # Logging
    "setup_logging",
    "LogLevel",
]
