"""Command-line entry points.

    python -m web_rag ingest https://example.com https://example.com/about
    python -m web_rag ask "What is the cohort about?"
"""

from __future__ import annotations

import argparse
import logging
import sys

from web_rag.errors import WebRagError


def _ingest(args: argparse.Namespace) -> int:
    from web_rag.config import settings
    from web_rag.ingestion.pipeline import build_ingestion_pipeline

    pipeline = build_ingestion_pipeline(settings)
    reports = pipeline.ingest_many(args.urls)
    for report in reports:
        print(report.summary())
    return 0 if all(r.success for r in reports) else 1


def _ask(args: argparse.Namespace) -> int:
    from web_rag.config import settings
    from web_rag.retrieval.answerer import build_answer_assembler

    assembler = build_answer_assembler(settings)
    try:
        answer = assembler.answer(args.question)
    except WebRagError as exc:
        print(f"Could not answer: {exc}", file=sys.stderr)
        return 2

    print(answer.text)
    if answer.sources:
        print("\nSources:")
        for url in answer.sources:
            print(f"  {url}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="web_rag", description="Web page RAG pipeline")
    parser.add_argument("--log-level", default="INFO", help="Python logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    ingest = sub.add_parser("ingest", help="Scrape, chunk, embed and store one or more URLs")
    ingest.add_argument("urls", nargs="+", help="Page URLs to ingest")
    ingest.set_defaults(func=_ingest)

    ask = sub.add_parser("ask", help="Answer a question from the stored pages")
    ask.add_argument("question", help="Natural-language question")
    ask.set_defaults(func=_ask)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
