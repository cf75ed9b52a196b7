"""
Observability module: structured logging.
"""

from media_vectors.observability.logging import (
    LogLevel,
    StructuredLogger,
    JsonFormatter,
    get_logger,
    setup_logging,
)

__all__ = [
    "LogLevel",
    "StructuredLogger",
    "JsonFormatter",
    "get_logger",
    "setup_logging",
]
