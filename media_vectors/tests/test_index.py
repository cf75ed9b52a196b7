"""
Unit Tests: Exact Vector Index

Tests:
    - Insert (single and batch) and id assignment
    - Search ordering for every metric
    - k edge cases and dimension validation
    - Tie ordering, clear, get_vector
    - One-shot knn_search / batch_cosine_similarity
"""

import pytest
import numpy as np

from media_vectors.core.config import IndexConfig
from media_vectors.core.errors import ErrorCode
from media_vectors.core.types import DistanceMetric
from media_vectors.index.flat import (
    VectorIndex,
    batch_cosine_similarity,
    knn_search,
    rank_scores,
)


@pytest.fixture
def cosine_index():
    index = VectorIndex(dimension=3, metric=DistanceMetric.COSINE)
    index.add_vector([1.0, 0.0, 0.0])
    index.add_vector([0.0, 1.0, 0.0])
    index.add_vector([0.0, 0.0, 1.0])
    index.add_vector([0.9, 0.1, 0.0])
    return index


@pytest.fixture
def random_vectors():
    rng = np.random.default_rng(42)
    return rng.standard_normal((50, 8)).astype(np.float32)


class TestInsert:
    """Tests for vector insertion."""

    def test_ids_are_sequential(self):
        index = VectorIndex(dimension=2)

        ids = [index.add_vector([float(i), 1.0]).unwrap() for i in range(5)]

        assert ids == [0, 1, 2, 3, 4]
        assert index.size() == 5
        assert len(index) == 5

    def test_dimension_mismatch(self):
        index = VectorIndex(dimension=3)
        index.add_vector([1.0, 0.0, 0.0])

        result = index.add_vector([1.0, 0.0])

        assert result.is_err()
        assert result.error.code == ErrorCode.DIMENSION_MISMATCH
        assert result.error.details == {"expected": 3, "actual": 2}
        assert index.size() == 1

    def test_cosine_stores_normalized(self):
        index = VectorIndex(dimension=2, metric=DistanceMetric.COSINE)
        index.add_vector([3.0, 4.0])

        np.testing.assert_allclose(index.get_vector(0), [0.6, 0.8], rtol=1e-6)

    def test_other_metrics_store_raw(self):
        index = VectorIndex(dimension=2, metric=DistanceMetric.EUCLIDEAN)
        index.add_vector([3.0, 4.0])

        np.testing.assert_array_equal(index.get_vector(0), [3.0, 4.0])

    def test_caller_vector_untouched(self):
        index = VectorIndex(dimension=2, metric=DistanceMetric.COSINE)
        vector = np.array([3.0, 4.0], dtype=np.float32)
        index.add_vector(vector)
        vector[0] = 100.0

        np.testing.assert_allclose(index.get_vector(0), [0.6, 0.8], rtol=1e-6)

    def test_batch_insert(self):
        index = VectorIndex(dimension=2, metric=DistanceMetric.EUCLIDEAN)

        result = index.add_vectors_batch([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], count=3)

        assert result.unwrap() == [0, 1, 2]
        np.testing.assert_array_equal(index.get_vector(2), [5.0, 6.0])

    def test_batch_wrong_length_leaves_index_unchanged(self):
        index = VectorIndex(dimension=2)
        index.add_vector([1.0, 0.0])

        result = index.add_vectors_batch([1.0, 2.0, 3.0], count=2)

        assert result.is_err()
        assert result.error.code == ErrorCode.DIMENSION_MISMATCH
        assert index.size() == 1

    def test_batch_empty(self):
        index = VectorIndex(dimension=2)

        assert index.add_vectors_batch([], count=0).unwrap() == []
        assert index.size() == 0

    def test_from_config(self):
        index = VectorIndex.from_config(IndexConfig(dimension=5, metric=DistanceMetric.MANHATTAN))

        assert index.dimension() == 5
        assert index.metric is DistanceMetric.MANHATTAN


class TestSearch:
    """Tests for k-nearest-neighbor search."""

    def test_cosine_best_first(self, cosine_index):
        results = cosine_index.search([1.0, 0.0, 0.0], k=2).unwrap()

        assert [r.id for r in results] == [0, 3]
        assert results[0].score == pytest.approx(1.0, abs=1e-6)
        assert results[1].score == pytest.approx(0.9 / np.sqrt(0.82), abs=1e-5)

    def test_query_not_normalized_by_caller(self, cosine_index):
        results = cosine_index.search([5.0, 0.0, 0.0], k=1).unwrap()

        assert results[0].id == 0
        assert results[0].score == pytest.approx(1.0, abs=1e-6)

    def test_euclidean_ascending(self):
        index = VectorIndex(dimension=2, metric=DistanceMetric.EUCLIDEAN)
        for v in ([0.0, 0.0], [3.0, 4.0], [1.0, 0.0]):
            index.add_vector(v)

        results = index.search([0.0, 0.0], k=3).unwrap()

        assert [r.id for r in results] == [0, 2, 1]
        np.testing.assert_allclose([r.score for r in results], [0.0, 1.0, 5.0], rtol=1e-6)

    def test_manhattan_ascending(self):
        index = VectorIndex(dimension=3, metric=DistanceMetric.MANHATTAN)
        index.add_vector([4.0, 5.0, 6.0])
        index.add_vector([1.0, 2.0, 4.0])

        results = index.search([1.0, 2.0, 3.0], k=2).unwrap()

        assert [r.id for r in results] == [1, 0]
        assert results[1].score == pytest.approx(9.0)

    def test_dot_product_descending(self):
        index = VectorIndex(dimension=2, metric=DistanceMetric.DOT_PRODUCT)
        index.add_vector([1.0, 0.0])
        index.add_vector([3.0, 0.0])
        index.add_vector([-1.0, 0.0])

        results = index.search([1.0, 0.0], k=3).unwrap()

        assert [r.id for r in results] == [1, 0, 2]
        assert results[0].score == pytest.approx(3.0)

    @pytest.mark.parametrize("metric", list(DistanceMetric))
    def test_scores_monotonic(self, metric, random_vectors):
        index = VectorIndex(dimension=8, metric=metric)
        index.add_vectors_batch(random_vectors.reshape(-1), count=len(random_vectors))

        scores = [r.score for r in index.search(random_vectors[0], k=50).unwrap()]

        if metric.is_similarity():
            assert all(a >= b for a, b in zip(scores, scores[1:]))
        else:
            assert all(a <= b for a, b in zip(scores, scores[1:]))

    @pytest.mark.parametrize("metric", [DistanceMetric.COSINE, DistanceMetric.EUCLIDEAN, DistanceMetric.MANHATTAN])
    def test_self_is_nearest(self, metric, random_vectors):
        index = VectorIndex(dimension=8, metric=metric)
        index.add_vectors_batch(random_vectors.reshape(-1), count=len(random_vectors))

        for i in (0, 17, 49):
            assert index.search(random_vectors[i], k=1).unwrap()[0].id == i

    def test_k_zero(self, cosine_index):
        assert cosine_index.search([1.0, 0.0, 0.0], k=0).unwrap() == []

    def test_k_larger_than_size(self, cosine_index):
        results = cosine_index.search([1.0, 0.0, 0.0], k=100).unwrap()

        assert len(results) == 4
        assert sorted(r.id for r in results) == [0, 1, 2, 3]

    def test_negative_k(self, cosine_index):
        result = cosine_index.search([1.0, 0.0, 0.0], k=-1)

        assert result.is_err()
        assert result.error.code == ErrorCode.INVALID_CONFIGURATION

    def test_empty_index(self):
        assert VectorIndex(dimension=3).search([1.0, 0.0, 0.0], k=5).unwrap() == []

    def test_query_dimension_mismatch(self, cosine_index):
        result = cosine_index.search([1.0, 0.0], k=1)

        assert result.is_err()
        assert result.error.code == ErrorCode.DIMENSION_MISMATCH

    def test_ties_keep_insertion_order(self):
        index = VectorIndex(dimension=2, metric=DistanceMetric.EUCLIDEAN)
        for _ in range(5):
            index.add_vector([1.0, 1.0])

        results = index.search([0.0, 0.0], k=5).unwrap()

        assert [r.id for r in results] == [0, 1, 2, 3, 4]

    def test_zero_vector_stored_under_cosine(self):
        index = VectorIndex(dimension=2, metric=DistanceMetric.COSINE)
        index.add_vector([0.0, 0.0])
        index.add_vector([1.0, 0.0])

        results = index.search([1.0, 0.0], k=2).unwrap()

        assert [r.id for r in results] == [1, 0]
        assert results[1].score == 0.0

    def test_search_sees_later_inserts(self, cosine_index):
        cosine_index.search([1.0, 0.0, 0.0], k=1)
        cosine_index.add_vector([0.0, 0.0, 2.0])

        results = cosine_index.search([0.0, 0.0, 1.0], k=2).unwrap()

        assert {r.id for r in results} == {2, 4}


class TestMaintenance:
    """Tests for get_vector, clear and stats."""

    def test_get_vector_out_of_range(self, cosine_index):
        assert cosine_index.get_vector(4) is None
        assert cosine_index.get_vector(-1) is None

    def test_get_vector_returns_copy(self, cosine_index):
        vector = cosine_index.get_vector(0)
        vector[0] = 42.0

        assert cosine_index.get_vector(0)[0] == pytest.approx(1.0)

    def test_clear_resets_ids(self, cosine_index):
        cosine_index.clear()

        assert cosine_index.size() == 0
        assert cosine_index.search([1.0, 0.0, 0.0], k=3).unwrap() == []
        assert cosine_index.add_vector([0.0, 1.0, 0.0]).unwrap() == 0

    def test_stats(self, cosine_index):
        stats = cosine_index.stats()

        assert stats.size == 4
        assert stats.dimension == 3
        assert stats.metric is DistanceMetric.COSINE
        assert "size=4" in repr(cosine_index)


class TestRankScores:

    def test_similarity_descending(self):
        results = rank_scores(np.array([0.1, 0.9, 0.5]), DistanceMetric.DOT_PRODUCT, 2)
        assert [r.id for r in results] == [1, 2]

    def test_distance_ascending(self):
        results = rank_scores(np.array([0.1, 0.9, 0.5]), DistanceMetric.EUCLIDEAN, 3)
        assert [r.id for r in results] == [0, 2, 1]


class TestOneShotSearch:
    """Tests for knn_search and batch_cosine_similarity."""

    def test_batch_cosine_similarity(self):
        flat = [1.0, 0.0, 0.0, 2.0, 1.0, 1.0]

        scores = batch_cosine_similarity([3.0, 0.0], flat, dimension=2).unwrap()

        np.testing.assert_allclose(scores, [1.0, 0.0, 0.70710677], atol=1e-5)

    def test_batch_cosine_zero_row(self):
        scores = batch_cosine_similarity([1.0, 0.0], [0.0, 0.0, 1.0, 0.0], dimension=2).unwrap()

        np.testing.assert_allclose(scores, [0.0, 1.0])

    def test_batch_cosine_bad_buffer(self):
        result = batch_cosine_similarity([1.0, 0.0], [1.0, 2.0, 3.0], dimension=2)

        assert result.is_err()
        assert result.error.code == ErrorCode.INVALID_BATCH_SIZE

    def test_knn_search(self):
        flat = [1.0, 0.0, 0.0, 1.0, 0.9, 0.1]

        results = knn_search([1.0, 0.0], flat, dimension=2, k=2).unwrap()

        assert [r.id for r in results] == [0, 2]

    def test_knn_search_matches_index(self, random_vectors):
        index = VectorIndex(dimension=8, metric=DistanceMetric.COSINE)
        index.add_vectors_batch(random_vectors.reshape(-1), count=len(random_vectors))
        query = random_vectors[5] + 0.1

        expected = [r.id for r in index.search(query, k=10).unwrap()]
        actual = [r.id for r in knn_search(query, random_vectors.reshape(-1), 8, k=10).unwrap()]

        assert actual[0] == expected[0]
        assert set(actual) == set(expected)
