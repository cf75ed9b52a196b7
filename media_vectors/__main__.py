"""
media_vectors CLI Entrypoint

Commands:
    media-vectors benchmark   Time inserts and searches on random vectors
    media-vectors stats       Per-dimension statistics of a .npy batch
    media-vectors --version   Show version info
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from typing import NoReturn, Optional, Sequence

import numpy as np

from media_vectors.core.config import EngineSettings
from media_vectors.observability.logging import LogLevel, setup_logging


def build_parser() -> argparse.ArgumentParser:
    settings = EngineSettings.from_env()

    parser = argparse.ArgumentParser(
        prog="media-vectors",
        description="Exact in-memory vector search for media search",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Log level (default: {settings.log_level})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run linear-scan search benchmark")
    bench_parser.add_argument(
        "--vectors",
        type=int,
        default=10000,
        help="Number of random vectors to index",
    )
    bench_parser.add_argument(
        "--dimension",
        type=int,
        default=settings.dimension,
        help=f"Vector dimension (default: {settings.dimension})",
    )
    bench_parser.add_argument(
        "--queries",
        type=int,
        default=100,
        help="Number of search queries",
    )
    bench_parser.add_argument("--k", type=int, default=10, help="Results per query")
    bench_parser.add_argument(
        "--metric",
        choices=["cosine", "euclidean", "manhattan", "dotproduct"],
        default=settings.metric,
        help=f"Distance metric (default: {settings.metric})",
    )
    bench_parser.add_argument("--seed", type=int, default=42, help="Random seed")

    # stats command
    stats_parser = subparsers.add_parser("stats", help="Embedding statistics of a .npy file")
    stats_parser.add_argument("path", help="2D array of shape [count, dimension]")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = EngineSettings.from_env()
    setup_logging(level=LogLevel.from_name(args.log_level), json_output=settings.log_json)

    if args.command == "benchmark":
        code = _run_benchmark(args)
    elif args.command == "stats":
        code = _run_stats(args)
    else:
        parser.print_help()
        code = 0

    sys.exit(code)


def _get_version() -> str:
    from media_vectors import __version__
    return __version__


def _run_benchmark(args: argparse.Namespace) -> int:
    """Insert random vectors, then time searches against them."""
    from media_vectors.engine import VectorSearchEngine

    created = VectorSearchEngine.create(args.dimension, args.metric)
    if created.is_err():
        print(f"error: {created.error}", file=sys.stderr)
        return 2
    engine = created.unwrap()

    rng = np.random.default_rng(args.seed)
    data = rng.standard_normal((args.vectors, args.dimension)).astype(np.float32)
    queries = rng.standard_normal((args.queries, args.dimension)).astype(np.float32)

    start = time.perf_counter()
    inserted = engine.add_batch(data.reshape(-1), args.vectors)
    insert_ms = (time.perf_counter() - start) * 1000
    if inserted.is_err():
        print(f"error: {inserted.error}", file=sys.stderr)
        return 1

    latencies: list[float] = []
    for query in queries:
        result = engine.search(query, args.k)
        if result.is_err():
            print(f"error: {result.error}", file=sys.stderr)
            return 1
        latencies.append(result.unwrap().query_time_ms)

    report = {
        "metric": args.metric,
        "vectors": args.vectors,
        "dimension": args.dimension,
        "queries": args.queries,
        "k": args.k,
        "insert_ms": round(insert_ms, 3),
        "search_ms_mean": round(float(np.mean(latencies)), 3) if latencies else 0.0,
        "search_ms_p99": round(float(np.percentile(latencies, 99)), 3) if latencies else 0.0,
    }
    print(json.dumps(report, indent=2))
    return 0


def _run_stats(args: argparse.Namespace) -> int:
    """Print EmbeddingStats for a saved batch."""
    from media_vectors.embeddings.stats import EmbeddingStats

    try:
        batch = np.load(args.path)
    except (OSError, ValueError) as exc:
        print(f"error: cannot load {args.path}: {exc}", file=sys.stderr)
        return 1

    if batch.ndim != 2:
        print(f"error: expected a 2D array, got shape {batch.shape}", file=sys.stderr)
        return 1

    result = EmbeddingStats.from_batch(batch.reshape(-1), batch.shape[1])
    if result.is_err():
        print(f"error: {result.error}", file=sys.stderr)
        return 1

    print(json.dumps(result.unwrap().to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    main()
