"""
Result Monad & Error Types: Exception-Free Caller Errors

Every fallible operation in media_vectors returns a Result[T, E] instead of
raising. Caller mistakes (wrong vector length, unknown metric name, bad
batch size, out-of-range id) come back as Err(VectorSearchError); only
programming errors such as unwrapping an Err raise.

Usage:
    result = index.add_vector([0.1, 0.2, 0.3])
    if result.is_err():
        log.warning("insert rejected", **result.error.to_dict())
    else:
        vector_id = result.unwrap()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import (
    Any,
    Callable,
    Generic,
    Literal,
    NoReturn,
    Optional,
    TypeVar,
    Union,
    final,
)


# =============================================================================
# TYPE VARIABLES
# =============================================================================
T = TypeVar("T")  # Success value type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Transform result type


# =============================================================================
# RESULT MONAD: SUCCESS VARIANT
# =============================================================================
@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Success variant of Result.

    Example:
        result: Result[int, VectorSearchError] = Ok(42)
        if result.is_ok():
            value = result.unwrap()
    """
    _value: T

    def is_ok(self) -> Literal[True]:
        return True

    def is_err(self) -> Literal[False]:
        return False

    def unwrap(self) -> T:
        """Extract value. Safe to call after is_ok() check."""
        return self._value

    def unwrap_or(self, default: T) -> T:
        return self._value

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        return self._value

    def expect(self, msg: str) -> T:
        return self._value

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        """
        Apply transformation to success value.

        Example:
            Ok(5).map(lambda x: x * 2)  # Ok(10)
        """
        return Ok(fn(self._value))

    def map_err(self, fn: Callable[[Any], Any]) -> "Ok[T]":
        return self

    def flat_map(self, fn: Callable[[T], "Result[U, Any]"]) -> "Result[U, Any]":
        """Chain a fallible operation on the success value."""
        return fn(self._value)

    def and_then(self, fn: Callable[[T], "Result[U, Any]"]) -> "Result[U, Any]":
        """Alias for flat_map."""
        return fn(self._value)

    @property
    def value(self) -> T:
        return self._value

    @property
    def error(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"

    def __bool__(self) -> Literal[True]:
        return True


# =============================================================================
# RESULT MONAD: ERROR VARIANT
# =============================================================================
@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """
    Error variant of Result.

    Example:
        result = index.search([1.0, 2.0], k=5)
        if result.is_err():
            print(f"Error: {result.error}")
    """
    _error: E

    def is_ok(self) -> Literal[False]:
        return False

    def is_err(self) -> Literal[True]:
        return True

    def unwrap(self) -> NoReturn:
        """
        Attempting to unwrap an error is a programming error.

        Raises:
            RuntimeError: Always, with error context
        """
        raise RuntimeError(f"Called unwrap() on Err: {self._error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        return f()

    def expect(self, msg: str) -> NoReturn:
        raise RuntimeError(f"{msg}: {self._error}")

    def map(self, fn: Callable[[Any], U]) -> "Err[E]":
        return self

    def map_err(self, fn: Callable[[E], U]) -> "Err[U]":
        return Err(fn(self._error))

    def flat_map(self, fn: Callable[[Any], "Result[U, E]"]) -> "Err[E]":
        return self

    def and_then(self, fn: Callable[[Any], "Result[U, E]"]) -> "Err[E]":
        return self

    @property
    def value(self) -> None:
        return None

    @property
    def error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Err({self._error!r})"

    def __bool__(self) -> Literal[False]:
        return False


# Union type for pattern matching
Result = Union[Ok[T], Err[E]]


# =============================================================================
# ERROR TAXONOMY
# =============================================================================
class ErrorCode(Enum):
    """
    Canonical error codes.

    Ranges:
        1000-1999: Index / store errors
        2000-2999: Batch errors
        5000-5999: Configuration errors
        9000-9999: Internal errors
    """
    # Index / store errors (1000-1999)
    DIMENSION_MISMATCH = 1001
    INDEX_OUT_OF_BOUNDS = 1002

    # Batch errors (2000-2999)
    INVALID_BATCH_SIZE = 2001

    # Configuration errors (5000-5999)
    INVALID_CONFIGURATION = 5001

    # Internal errors (9000-9999)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class VectorSearchError:
    """
    Base error type for all media_vectors operations.

    Structured error with:
        - error code for categorization
        - human-readable message
        - machine-readable details
        - timestamp for debugging
    """
    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging/transmission."""
        return {
            "code": self.code.value,
            "code_name": self.code.name,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


# =============================================================================
# SPECIALIZED ERROR TYPES (Convenience constructors)
# =============================================================================
class IndexError(VectorSearchError):
    """Error raised by VectorIndex and CompressedVectorStore operations."""

    @classmethod
    def dimension_mismatch(cls, expected: int, actual: int) -> "IndexError":
        return cls(
            code=ErrorCode.DIMENSION_MISMATCH,
            message=f"Dimension mismatch: expected {expected}, got {actual}",
            details={"expected": expected, "actual": actual},
        )

    @classmethod
    def out_of_bounds(cls, id: int, count: int) -> "IndexError":
        return cls(
            code=ErrorCode.INDEX_OUT_OF_BOUNDS,
            message=f"Index out of bounds: id {id}, count {count}",
            details={"id": id, "count": count},
        )


class BatchError(VectorSearchError):
    """Flat buffer does not hold a whole number of vectors."""

    @classmethod
    def invalid_batch_size(
        cls,
        length: int,
        dimension: int,
        expected: Optional[int] = None,
    ) -> "BatchError":
        if expected is not None:
            message = f"Invalid batch size: expected {expected} floats, got {length}"
        else:
            message = (
                f"Invalid batch size: {length} floats is not a positive "
                f"multiple of dimension {dimension}"
            )
        return cls(
            code=ErrorCode.INVALID_BATCH_SIZE,
            message=message,
            details={"length": length, "dimension": dimension, "expected": expected},
        )


class ConfigError(VectorSearchError):
    """Error in configuration."""

    @classmethod
    def invalid(cls, param: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.INVALID_CONFIGURATION,
            message=f"Invalid config '{param}': {reason}",
            details={"param": param, "value": value, "reason": reason},
        )

    @classmethod
    def unknown_metric(cls, name: str) -> "ConfigError":
        return cls.invalid(
            "metric",
            name,
            "use one of: cosine, euclidean, manhattan, dotproduct",
        )

    @classmethod
    def unknown_strategy(cls, name: str) -> "ConfigError":
        return cls.invalid(
            "strategy",
            name,
            "use one of: mean, max, sum, weighted",
        )
