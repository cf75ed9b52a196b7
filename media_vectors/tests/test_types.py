"""
Unit Tests: Core Types, Errors and Configuration

Tests:
    - DistanceMetric ordering flags and name parsing
    - PoolingStrategy parsing
    - SearchResult / SearchResults serialization
    - Result monad behavior
    - Config validation and environment loading
"""

import json

import pytest

from media_vectors.core.config import (
    CacheConfig,
    CompressionConfig,
    EngineSettings,
    IndexConfig,
    PoolingConfig,
)
from media_vectors.core.errors import (
    BatchError,
    ConfigError,
    Err,
    ErrorCode,
    IndexError,
    Ok,
)
from media_vectors.core.types import (
    CacheStats,
    DistanceMetric,
    IndexStats,
    PoolingStrategy,
    SearchResult,
    SearchResults,
)


class TestDistanceMetric:
    """Tests for DistanceMetric."""

    def test_similarity_metrics(self):
        assert DistanceMetric.COSINE.is_similarity()
        assert DistanceMetric.DOT_PRODUCT.is_similarity()
        assert not DistanceMetric.EUCLIDEAN.is_similarity()
        assert not DistanceMetric.MANHATTAN.is_similarity()

    def test_distance_metrics(self):
        assert DistanceMetric.EUCLIDEAN.is_distance()
        assert DistanceMetric.MANHATTAN.is_distance()
        assert not DistanceMetric.COSINE.is_distance()

    def test_only_cosine_normalizes(self):
        assert DistanceMetric.COSINE.requires_normalization()
        for metric in (DistanceMetric.EUCLIDEAN, DistanceMetric.MANHATTAN, DistanceMetric.DOT_PRODUCT):
            assert not metric.requires_normalization()

    @pytest.mark.parametrize("name,expected", [
        ("cosine", DistanceMetric.COSINE),
        ("Euclidean", DistanceMetric.EUCLIDEAN),
        ("l2", DistanceMetric.EUCLIDEAN),
        ("manhattan", DistanceMetric.MANHATTAN),
        ("dotproduct", DistanceMetric.DOT_PRODUCT),
        (" dot_product ", DistanceMetric.DOT_PRODUCT),
    ])
    def test_parse(self, name, expected):
        assert DistanceMetric.parse(name).unwrap() is expected

    def test_parse_passthrough(self):
        assert DistanceMetric.parse(DistanceMetric.MANHATTAN).unwrap() is DistanceMetric.MANHATTAN

    def test_parse_unknown(self):
        result = DistanceMetric.parse("hamming")

        assert result.is_err()
        assert result.error.code == ErrorCode.INVALID_CONFIGURATION
        assert result.error.details["value"] == "hamming"


class TestPoolingStrategy:

    def test_parse(self):
        assert PoolingStrategy.parse("MAX").unwrap() is PoolingStrategy.MAX
        assert PoolingStrategy.parse(PoolingStrategy.SUM).unwrap() is PoolingStrategy.SUM

    def test_parse_unknown(self):
        result = PoolingStrategy.parse("median")
        assert result.is_err()
        assert result.error.details["param"] == "strategy"


class TestSearchResults:
    """Tests for search result containers."""

    def test_result_to_dict(self):
        assert SearchResult(id=3, score=0.5).to_dict() == {"id": 3, "score": 0.5}

    def test_result_is_frozen(self):
        result = SearchResult(id=1, score=0.1)
        with pytest.raises(AttributeError):
            result.score = 0.2

    def test_results_container(self):
        results = SearchResults(
            matches=[SearchResult(id=2, score=0.9), SearchResult(id=0, score=0.4)],
            query_time_ms=1.5,
        )

        assert len(results) == 2
        assert results[0].id == 2
        assert results.ids == [2, 0]
        assert results.scores == [0.9, 0.4]
        assert [m.id for m in results] == [2, 0]

    def test_results_to_dict_is_json(self):
        results = SearchResults(matches=[SearchResult(id=1, score=0.25)], query_time_ms=0.1)
        payload = json.loads(json.dumps(results.to_dict()))

        assert payload["results"] == [{"id": 1, "score": 0.25}]
        assert payload["query_time_ms"] == 0.1

    def test_index_stats(self):
        stats = IndexStats(size=10, dimension=4, metric=DistanceMetric.EUCLIDEAN)

        assert stats.index_size_bytes == 160
        assert stats.to_dict()["metric"] == "euclidean"

    def test_cache_stats(self):
        assert CacheStats(size=1, max_size=5).to_dict() == {"size": 1, "max_size": 5}


class TestResult:
    """Tests for the Result monad."""

    def test_ok(self):
        result = Ok(5)

        assert result.is_ok() and not result.is_err()
        assert result.unwrap() == 5
        assert result.map(lambda x: x * 2).unwrap() == 10
        assert result.and_then(lambda x: Ok(x + 1)).unwrap() == 6
        assert bool(result)

    def test_err(self):
        result = Err(ConfigError.invalid("k", -1, "must be >= 0"))

        assert result.is_err()
        assert result.unwrap_or(7) == 7
        assert result.map(lambda x: x * 2) is result
        assert not bool(result)
        with pytest.raises(RuntimeError):
            result.unwrap()

    def test_expect_message(self):
        with pytest.raises(RuntimeError, match="loading"):
            Err(BatchError.invalid_batch_size(5, 2)).expect("loading")


class TestErrors:
    """Tests for error constructors."""

    def test_dimension_mismatch(self):
        error = IndexError.dimension_mismatch(3, 2)

        assert error.code == ErrorCode.DIMENSION_MISMATCH
        assert error.details == {"expected": 3, "actual": 2}
        assert "DIMENSION_MISMATCH" in str(error)

    def test_out_of_bounds(self):
        error = IndexError.out_of_bounds(9, 4)
        assert error.code == ErrorCode.INDEX_OUT_OF_BOUNDS
        assert error.code.value == 1002

    def test_batch_error_to_dict(self):
        data = BatchError.invalid_batch_size(7, 3).to_dict()

        assert data["code"] == 2001
        assert data["code_name"] == "INVALID_BATCH_SIZE"
        assert data["details"]["length"] == 7
        json.dumps(data)


class TestConfig:
    """Tests for configuration classes."""

    def test_index_config_validate(self):
        assert IndexConfig(dimension=3).validate() is None
        assert IndexConfig(dimension=0).validate() is not None

    def test_compression_factor_clamped(self):
        assert CompressionConfig(dimension=4, compression_factor=0).effective_factor == 1
        assert CompressionConfig(dimension=4, compression_factor=20).effective_factor == 8
        assert CompressionConfig(dimension=4, compression_factor=4).effective_factor == 4
        assert CompressionConfig(dimension=4).compression_ratio == 4.0

    def test_pooling_defaults(self):
        config = PoolingConfig()
        assert config.strategy is PoolingStrategy.MEAN
        assert config.normalize

    def test_cache_config_validate(self):
        assert CacheConfig(max_size=1).validate() is None
        assert CacheConfig(max_size=0).validate() is not None

    def test_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("MEDIA_VECTORS_DIMENSION", "64")
        monkeypatch.setenv("MEDIA_VECTORS_METRIC", "manhattan")
        monkeypatch.setenv("MEDIA_VECTORS_CACHE_SIZE", "5")
        monkeypatch.setenv("MEDIA_VECTORS_LOG_LEVEL", "debug")
        monkeypatch.setenv("MEDIA_VECTORS_LOG_JSON", "false")

        settings = EngineSettings.from_env()

        assert settings.dimension == 64
        assert settings.metric == "manhattan"
        assert settings.cache_size == 5
        assert settings.log_level == "DEBUG"
        assert settings.log_json is False

    def test_settings_defaults(self, monkeypatch):
        for var in ("MEDIA_VECTORS_DIMENSION", "MEDIA_VECTORS_METRIC", "MEDIA_VECTORS_CACHE_SIZE",
                    "MEDIA_VECTORS_LOG_LEVEL", "MEDIA_VECTORS_LOG_JSON"):
            monkeypatch.delenv(var, raising=False)

        settings = EngineSettings.from_env()

        assert settings.dimension == 384
        assert settings.metric == "cosine"
        assert settings.log_json is True
