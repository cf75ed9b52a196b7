"""
Core Module: Types, Errors, and Configuration

Foundational abstractions shared by the index, store, pooling and cache
modules. Depends only on numpy.
"""

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

__all__ = [
    # Types
    "VectorLike",
    "DistanceMetric",
    "PoolingStrategy",
    "SearchResult",
    "SearchResults",
    "IndexStats",
    "CacheStats",
    # Errors
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
]
