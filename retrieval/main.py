#!/usr/bin/env python3
"""
Course Retrieval CLI - index course materials and ask questions

Prerequisites:
    1. Ollama is running: ollama serve
    2. Models are available: ollama pull nomic-embed-text

Usage:
    python -m retrieval.main ingest uploads/lecture_01.pdf --course 3
    python -m retrieval.main query "What is entropy?" --course 3
    python -m retrieval.main sources --course 3
    python -m retrieval.main serve --port 8000
"""

import argparse
import sys

from loaders import LoaderError
from vector_store import VectorStoreError

from .config import RetrievalConfig
from .exceptions import RetrievalError
from .logging_config import setup_logging
from .service import RetrievalService


def cmd_ingest(service: RetrievalService, args: argparse.Namespace) -> None:
    def progress(current, total, status):
        print(f"  [{current}/{total}] {status}")

    stats = service.ingest(args.file, args.course, progress_callback=progress)

    print(f"\n  Source:          {stats.source}")
    print(f"  Documents:       {stats.documents_loaded}")
    print(f"  Chunks stored:   {stats.chunks_stored}")
    print(f"  Summarized:      {stats.chunks_summarized}")
    print(f"  Embedding time:  {stats.embedding_time_seconds}s")
    print(f"  Total time:      {stats.total_time_seconds}s")


def cmd_query(service: RetrievalService, args: argparse.Namespace) -> None:
    result = service.query(args.question, args.course, top_k=args.top_k)

    print(f"\n=== Query: \"{args.question}\" ===")
    for i, hit in enumerate(result.results, 1):
        page = hit.page if hit.page is not None else "-"
        print(f"  {i}. score={hit.score:.4f}  {hit.source} (page {page})")

    print("\n=== Context ===\n")
    print(result.content)
    if result.sources:
        print(f"\nSources: {', '.join(result.sources)}")


def cmd_sources(service: RetrievalService, args: argparse.Namespace) -> None:
    summaries = service.list_sources(args.course)
    if not summaries:
        print("No course materials have been indexed yet.")
        return
    for summary in summaries:
        pages = f" pages {summary.pages[0]}-{summary.pages[-1]}" if summary.pages else ""
        print(f"  {summary.source}: {summary.chunk_count} chunks{pages}")


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Index course materials and retrieve relevant passages",
    )
    parser.add_argument(
        "--indexes-dir",
        default=None,
        help="Directory holding the per-course stores (default: RETRIEVAL_INDEXES_DIR or uploads/indexes)",
    )
    parser.add_argument(
        "--no-summarize",
        action="store_true",
        help="Embed long chunks truncated instead of summarized",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    ingest = sub.add_parser("ingest", help="Index a PDF or text file")
    ingest.add_argument("file", help="Path to the file")
    ingest.add_argument("--course", "-c", type=int, required=True, help="Course id")
    ingest.set_defaults(handler=cmd_ingest)

    query = sub.add_parser("query", help="Retrieve context for a question")
    query.add_argument("question", help="Natural-language question")
    query.add_argument("--course", "-c", type=int, required=True, help="Course id")
    query.add_argument("--top-k", "-k", type=_positive_int, default=None, help="Number of passages")
    query.set_defaults(handler=cmd_query)

    sources = sub.add_parser("sources", help="List indexed files of a course")
    sources.add_argument("--course", "-c", type=int, required=True, help="Course id")
    sources.set_defaults(handler=cmd_sources)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    serve.set_defaults(handler=None)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = RetrievalConfig.from_env()
    if args.indexes_dir:
        config.indexes_dir = args.indexes_dir
    if args.no_summarize:
        config.summarize = False
    setup_logging(config.log_level)

    if args.command == "serve":
        import uvicorn

        from .app import create_app

        uvicorn.run(create_app(config), host=args.host, port=args.port)
        return 0

    service = RetrievalService(config)
    try:
        args.handler(service, args)
    except (LoaderError, RetrievalError, VectorStoreError) as exc:
        print(f"\nERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
