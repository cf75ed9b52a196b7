"""
Distance Kernels

Provides vectorized distance/similarity computations for the four
supported metrics:
    - Cosine similarity (dot product over unit-length vectors)
    - Euclidean (L2) distance
    - Manhattan (L1) distance
    - Dot product

Pair kernels assume equal-length inputs; the container that owns the
vectors validates dimensions before calling them. Batch kernels score one
query against a 2D matrix of shape [n, d] in a single numpy pass.
"""

from __future__ import annotations

from typing import Callable, Union

import numpy as np

from media_vectors.core.errors import BatchError, Err, Ok, Result
from media_vectors.core.types import DistanceMetric, VectorLike


def as_vector(v: VectorLike) -> np.ndarray:
    """Private float32 copy of a 1D vector."""
    return np.array(v, dtype=np.float32).reshape(-1)


# =============================================================================
# VECTOR NORMALIZATION
# =============================================================================
def vector_magnitude(v: VectorLike) -> float:
    """L2 norm of a vector."""
    v = np.asarray(v, dtype=np.float32)
    return float(np.sqrt(np.dot(v, v)))


def normalize_vector(v: VectorLike) -> np.ndarray:
    """
    L2-normalize vector(s) to unit length.

    A vector whose norm is exactly zero is returned unchanged.

    Args:
        v: Single vector (1D) or batch of vectors (2D)

    Returns:
        New float32 array with ||v|| = 1 (per row for 2D input)

    Complexity: O(d) per vector
    """
    v = np.array(v, dtype=np.float32)
    if v.ndim == 1:
        norm = np.sqrt(np.dot(v, v))
        return v / norm if norm > 0 else v
    # Batch normalization (2D array)
    norms = np.linalg.norm(v, axis=1, keepdims=True)
    norms = np.where(norms > 0, norms, 1.0)
    return (v / norms).astype(np.float32)


def normalize_vectors_batch(
    vectors: VectorLike,
    dimension: int,
) -> Result[np.ndarray, BatchError]:
    """
    Normalize every row of a flat buffer of vectors.

    Returns:
        Flat float32 buffer of the same length, each row unit length
    """
    flat = np.array(vectors, dtype=np.float32).reshape(-1)
    if dimension < 1 or len(flat) % dimension != 0:
        return Err(BatchError.invalid_batch_size(len(flat), dimension))
    if len(flat) == 0:
        return Ok(flat)
    return Ok(normalize_vector(flat.reshape(-1, dimension)).reshape(-1))


# =============================================================================
# PAIR KERNELS
# =============================================================================
def dot_product(a: VectorLike, b: VectorLike) -> float:
    """
    Compute inner (dot) product.

    Formula: a · b = Σ(aᵢ × bᵢ)

    Returns:
        Dot product (unbounded), higher = more similar

    Complexity: O(d)
    """
    a = np.asarray(a, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    return float(np.dot(a, b))


def cosine_similarity(a: VectorLike, b: VectorLike) -> float:
    """
    Cosine similarity of two vectors that are already unit length.

    Indexes normalize at insertion and query time, so this is the plain dot
    product and never recomputes norms per comparison.

    Returns:
        Similarity in [-1, 1] for unit inputs, higher = more similar
    """
    return dot_product(a, b)


def euclidean_distance(a: VectorLike, b: VectorLike) -> float:
    """
    Compute L2 (Euclidean) distance.

    Formula: ||a - b||₂ = √(Σ(aᵢ - bᵢ)²)

    Returns:
        Distance >= 0, lower = more similar
    """
    a = np.asarray(a, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    diff = a - b
    return float(np.sqrt(np.dot(diff, diff)))


def manhattan_distance(a: VectorLike, b: VectorLike) -> float:
    """
    Compute L1 (Manhattan) distance.

    Formula: Σ|aᵢ - bᵢ|

    Returns:
        Distance >= 0, lower = more similar
    """
    a = np.asarray(a, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    return float(np.sum(np.abs(a - b)))


# =============================================================================
# BATCH KERNELS
# =============================================================================
def dot_product_batch(query: VectorLike, vectors: VectorLike) -> np.ndarray:
    """
    Inner product between query and batch of vectors.

    Args:
        query: Query vector (1D, shape [d])
        vectors: Candidate vectors (2D, shape [n, d])

    Returns:
        Scores (1D, shape [n])
    """
    query = np.asarray(query, dtype=np.float32)
    vectors = np.asarray(vectors, dtype=np.float32)
    return vectors @ query


def cosine_similarity_batch(query: VectorLike, vectors: VectorLike) -> np.ndarray:
    """Cosine similarity for pre-normalized query and candidates."""
    return dot_product_batch(query, vectors)


def euclidean_distance_batch(query: VectorLike, vectors: VectorLike) -> np.ndarray:
    """
    L2 distance between query and batch of vectors.

    Computed from explicit differences rather than the
    ||a||² + ||b||² - 2(a·b) expansion so identical vectors score exactly 0.
    """
    query = np.asarray(query, dtype=np.float32)
    vectors = np.asarray(vectors, dtype=np.float32)
    diff = vectors - query
    return np.sqrt(np.einsum("ij,ij->i", diff, diff))


def manhattan_distance_batch(query: VectorLike, vectors: VectorLike) -> np.ndarray:
    """L1 distance between query and batch of vectors."""
    query = np.asarray(query, dtype=np.float32)
    vectors = np.asarray(vectors, dtype=np.float32)
    return np.abs(vectors - query).sum(axis=1)


# =============================================================================
# METRIC DISPATCH
# =============================================================================
_PAIR_KERNELS: dict[DistanceMetric, Callable[[VectorLike, VectorLike], float]] = {
    DistanceMetric.COSINE: cosine_similarity,
    DistanceMetric.EUCLIDEAN: euclidean_distance,
    DistanceMetric.MANHATTAN: manhattan_distance,
    DistanceMetric.DOT_PRODUCT: dot_product,
}

_BATCH_KERNELS: dict[DistanceMetric, Callable[[VectorLike, VectorLike], np.ndarray]] = {
    DistanceMetric.COSINE: cosine_similarity_batch,
    DistanceMetric.EUCLIDEAN: euclidean_distance_batch,
    DistanceMetric.MANHATTAN: manhattan_distance_batch,
    DistanceMetric.DOT_PRODUCT: dot_product_batch,
}


def compute_score(metric: DistanceMetric, a: VectorLike, b: VectorLike) -> float:
    """Score a single pair under metric."""
    return _PAIR_KERNELS[metric](a, b)


def compute_scores(metric: DistanceMetric, query: VectorLike, vectors: VectorLike) -> np.ndarray:
    """Score query against every row of vectors under metric."""
    return _BATCH_KERNELS[metric](query, vectors)


def get_distance_fn(metric: Union[str, DistanceMetric]) -> Callable[[VectorLike, VectorLike], float]:
    """
    Get pair kernel for metric.

    Args:
        metric: DistanceMetric or its name ("cosine", "euclidean",
            "manhattan", "dotproduct")

    Raises:
        ValueError: Unknown metric name
    """
    parsed = DistanceMetric.parse(metric)
    if parsed.is_err():
        raise ValueError(f"Unknown metric: {metric}")
    return _PAIR_KERNELS[parsed.unwrap()]
