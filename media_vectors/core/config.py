"""
Configuration Classes: Type-Safe Index, Store, Pooling and Cache Settings

Frozen dataclasses with a validate() hook returning an error string (or
None), plus EngineSettings.from_env() for process-level defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from media_vectors.core.types import DistanceMetric, PoolingStrategy

MIN_COMPRESSION_FACTOR = 1
MAX_COMPRESSION_FACTOR = 8
MAX_DIMENSION = 65536


# =============================================================================
# VECTOR INDEX CONFIGURATION
# =============================================================================
@dataclass(frozen=True, slots=True)
class IndexConfig:
    """
    Exact (linear scan) index configuration.

    Parameters:
        dimension: Length every stored and query vector must have
        metric: Scoring policy, fixed for the index lifetime
    """
    dimension: int = 768
    metric: DistanceMetric = DistanceMetric.COSINE

    def validate(self) -> Optional[str]:
        if self.dimension < 1 or self.dimension > MAX_DIMENSION:
            return f"dimension must be in [1, {MAX_DIMENSION}], got {self.dimension}"
        return None


# =============================================================================
# QUANTIZED STORE CONFIGURATION
# =============================================================================
@dataclass(frozen=True, slots=True)
class CompressionConfig:
    """
    Quantized store configuration.

    compression_factor is clamped into [1, 8] and kept for callers that
    inspect it; the encoding is always one unsigned byte per component.
    """
    dimension: int = 768
    compression_factor: int = MAX_COMPRESSION_FACTOR

    @property
    def effective_factor(self) -> int:
        return max(MIN_COMPRESSION_FACTOR, min(MAX_COMPRESSION_FACTOR, self.compression_factor))

    @property
    def compression_ratio(self) -> float:
        """float32 -> uint8."""
        return 4.0

    def validate(self) -> Optional[str]:
        if self.dimension < 1 or self.dimension > MAX_DIMENSION:
            return f"dimension must be in [1, {MAX_DIMENSION}], got {self.dimension}"
        return None


# =============================================================================
# POOLING CONFIGURATION
# =============================================================================
@dataclass(frozen=True, slots=True)
class PoolingConfig:
    """Embedding pooling configuration."""
    dimension: int = 768
    strategy: PoolingStrategy = PoolingStrategy.MEAN
    normalize: bool = True

    def validate(self) -> Optional[str]:
        if self.dimension < 1 or self.dimension > MAX_DIMENSION:
            return f"dimension must be in [1, {MAX_DIMENSION}], got {self.dimension}"
        return None


# =============================================================================
# RESULT CACHE CONFIGURATION
# =============================================================================
@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Bounded result cache configuration."""
    max_size: int = 100

    def validate(self) -> Optional[str]:
        if self.max_size < 1:
            return f"max_size must be >= 1, got {self.max_size}"
        return None


# =============================================================================
# ENGINE SETTINGS
# =============================================================================
@dataclass(slots=True)
class EngineSettings:
    """Process-level defaults for the search engine and CLI."""
    dimension: int = 384
    metric: str = "cosine"
    cache_size: int = 100
    log_level: str = "INFO"
    log_json: bool = True

    @classmethod
    def from_env(cls) -> "EngineSettings":
        return cls(
            dimension=int(os.getenv("MEDIA_VECTORS_DIMENSION", "384")),
            metric=os.getenv("MEDIA_VECTORS_METRIC", "cosine"),
            cache_size=int(os.getenv("MEDIA_VECTORS_CACHE_SIZE", "100")),
            log_level=os.getenv("MEDIA_VECTORS_LOG_LEVEL", "INFO").upper(),
            log_json=os.getenv("MEDIA_VECTORS_LOG_JSON", "1").lower() not in ("0", "false", "no"),
        )
