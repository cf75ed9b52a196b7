"""
Storage Module: quantized vector storage.
"""

from media_vectors.storage.compressed import (
    CompressedVectorStore,
    dequantize,
    quantize,
)

__all__ = [
    "CompressedVectorStore",
    "quantize",
    "dequantize",
]
