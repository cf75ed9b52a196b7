"""
Index Module: Exact Vector Search

Provides:
    - VectorIndex: linear-scan k-nearest-neighbor index
    - knn_search / batch_cosine_similarity: one-shot scans over flat buffers
    - Distance kernels: Cosine, Euclidean, Manhattan, Dot product
"""

from media_vectors.index.distance import (
    compute_scores,
    cosine_similarity,
    dot_product,
    euclidean_distance,
    get_distance_fn,
    manhattan_distance,
    normalize_vector,
    normalize_vectors_batch,
    vector_magnitude,
)
from media_vectors.index.flat import (
    VectorIndex,
    batch_cosine_similarity,
    knn_search,
    rank_scores,
)

__all__ = [
    # Index
    "VectorIndex",
    "knn_search",
    "batch_cosine_similarity",
    "rank_scores",
    # Distance
    "compute_scores",
    "cosine_similarity",
    "dot_product",
    "euclidean_distance",
    "manhattan_distance",
    "get_distance_fn",
    "normalize_vector",
    "normalize_vectors_batch",
    "vector_magnitude",
]
