"""
Named batch operations over flat embedding buffers.
"""

from __future__ import annotations

from typing import Callable, Union

import numpy as np

from media_vectors.core.errors import BatchError, ConfigError, Err, Result
from media_vectors.core.types import VectorLike
from media_vectors.embeddings.pooling import compute_centroid, split_batch
from media_vectors.index.distance import normalize_vectors_batch


class BatchProcessor:
    """
    Apply an operation to a whole batch by name.

    Operations:
        normalize  every row scaled to unit length (flat buffer out)
        centroid   mean vector of the batch
    """

    __slots__ = ("_dimension", "_batch_size", "_operations")

    def __init__(self, dimension: int, batch_size: int = 256) -> None:
        self._dimension = dimension
        self._batch_size = batch_size
        self._operations: dict[str, Callable[[np.ndarray], Result[np.ndarray, BatchError]]] = {
            "normalize": lambda flat: normalize_vectors_batch(flat, self._dimension),
            "centroid": lambda flat: compute_centroid(flat, self._dimension),
        }

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def batch_size(self) -> int:
        return self._batch_size

    @property
    def operations(self) -> list[str]:
        return sorted(self._operations)

    def process(
        self,
        vectors: VectorLike,
        operation: str,
    ) -> Result[np.ndarray, Union[BatchError, ConfigError]]:
        rows = split_batch(vectors, self._dimension)
        if rows.is_err():
            return rows

        op = self._operations.get(operation)
        if op is None:
            return Err(ConfigError.invalid(
                "operation", operation, f"use one of: {', '.join(self.operations)}",
            ))
        return op(rows.unwrap().reshape(-1))
