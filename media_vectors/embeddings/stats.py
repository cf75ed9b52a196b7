"""
Per-dimension statistics over a batch of embeddings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from media_vectors.core.errors import BatchError, Err, Ok, Result
from media_vectors.core.types import VectorLike
from media_vectors.embeddings.pooling import split_batch


@dataclass(frozen=True, slots=True)
class EmbeddingStats:
    """
    Mean, population standard deviation, min and max for each dimension.

    Each field is a float32 vector of length dimension.
    """
    mean: np.ndarray
    std_dev: np.ndarray
    min: np.ndarray
    max: np.ndarray
    count: int

    @property
    def dimension(self) -> int:
        return len(self.mean)

    @classmethod
    def from_batch(cls, embeddings: VectorLike, dimension: int) -> Result["EmbeddingStats", BatchError]:
        """
        Compute statistics for a flat buffer of embeddings.

        The mean is finished before the variance pass, which measures
        deviations from it; variance divides by count, not count - 1.
        """
        rows = split_batch(embeddings, dimension)
        if rows.is_err():
            return rows
        matrix = rows.unwrap()
        count = len(matrix)

        mean = matrix.sum(axis=0) / np.float32(count)
        diff = matrix - mean
        std_dev = np.sqrt((diff * diff).sum(axis=0) / np.float32(count))

        return Ok(cls(
            mean=mean.astype(np.float32),
            std_dev=std_dev.astype(np.float32),
            min=matrix.min(axis=0),
            max=matrix.max(axis=0),
            count=count,
        ))

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "dimension": self.dimension,
            "mean": self.mean.tolist(),
            "std_dev": self.std_dev.tolist(),
            "min": self.min.tolist(),
            "max": self.max.tolist(),
        }
