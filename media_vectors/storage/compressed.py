"""
Quantized Vector Store: 8-bit Fixed-Point Storage

Keeps vectors as one unsigned byte per component, 4x smaller than float32.

Encoding:
    q = round((clamp(x, -1, 1) + 1) * 127.5)      -> [0, 255]
    x' = q / 127.5 - 1                            -> [-1, 1]

Round-trip error is at most half a quantization step, 1/255 per component,
for inputs already inside [-1, 1]. Components outside that range are
clamped before encoding.

Buffer layout (the compatibility surface if bytes are persisted or sent):
    count * dimension bytes, row-major by vector then dimension.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from media_vectors.core.config import CompressionConfig
from media_vectors.core.errors import Err, IndexError, Ok, Result
from media_vectors.core.types import VectorLike
from media_vectors.index.distance import as_vector
from media_vectors.observability.logging import get_logger

log = get_logger("media_vectors.storage")

QUANT_SCALE = 127.5


def quantize(vector: VectorLike) -> np.ndarray:
    """Encode float components as uint8 codes."""
    clamped = np.clip(as_vector(vector), -1.0, 1.0)
    codes = np.rint((clamped + 1.0) * QUANT_SCALE)
    return np.clip(codes, 0, 255).astype(np.uint8)


def dequantize(codes: np.ndarray) -> np.ndarray:
    """Decode uint8 codes back to float32 components."""
    return (np.asarray(codes, dtype=np.float32) / np.float32(QUANT_SCALE)) - np.float32(1.0)


class CompressedVectorStore:
    """
    Append-only store of quantized vectors.

    Ids are insertion positions, like VectorIndex. Independent of any index:
    callers that want to search decode with get() first.

    compression_factor is clamped to [1, 8] and reported back, but the
    encoding is always 8 bits per component.
    """

    __slots__ = ("_buffer", "_dimension", "_count", "_compression_factor")

    def __init__(self, dimension: int, compression_factor: int = 8) -> None:
        config = CompressionConfig(dimension=dimension, compression_factor=compression_factor)
        self._buffer = bytearray()
        self._dimension = dimension
        self._count = 0
        self._compression_factor = config.effective_factor

    @classmethod
    def from_config(cls, config: CompressionConfig) -> "CompressedVectorStore":
        return cls(config.dimension, config.compression_factor)

    @property
    def compression_factor(self) -> int:
        return self._compression_factor

    def dimension(self) -> int:
        return self._dimension

    def count(self) -> int:
        return self._count

    def __len__(self) -> int:
        return self._count

    def memory_usage(self) -> int:
        """Bytes held by the quantized buffer (count * dimension)."""
        return len(self._buffer)

    def add(self, vector: VectorLike) -> Result[int, IndexError]:
        """
        Quantize and append a vector.

        Returns:
            Id of the stored vector
        """
        vec = as_vector(vector)
        if len(vec) != self._dimension:
            return Err(IndexError.dimension_mismatch(self._dimension, len(vec)))

        self._buffer.extend(quantize(vec).tobytes())
        self._count += 1
        return Ok(self._count - 1)

    def get(self, id: int) -> Result[np.ndarray, IndexError]:
        """Dequantized copy of vector id."""
        if id < 0 or id >= self._count:
            return Err(IndexError.out_of_bounds(id, self._count))

        return Ok(dequantize(self._codes(id)))

    def get_codes(self, id: int) -> Optional[np.ndarray]:
        """Raw uint8 codes of vector id, or None when out of range."""
        if id < 0 or id >= self._count:
            return None
        return self._codes(id)

    def _codes(self, id: int) -> np.ndarray:
        # Copy out of the bytearray so no view pins it against resizing
        start = id * self._dimension
        return np.frombuffer(bytes(self._buffer[start:start + self._dimension]), dtype=np.uint8)

    def to_bytes(self) -> bytes:
        """Row-major quantized buffer."""
        return bytes(self._buffer)

    def clear(self) -> None:
        dropped = self._count
        self._buffer = bytearray()
        self._count = 0
        log.debug("Compressed store cleared", dropped=dropped)

    def __repr__(self) -> str:
        return (
            f"CompressedVectorStore(dimension={self._dimension}, "
            f"count={self._count}, bytes={len(self._buffer)})"
        )
