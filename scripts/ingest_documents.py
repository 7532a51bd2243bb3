"""Chunk, embed and upsert portfolio documents into the vector index.

Usage:
    python scripts/ingest_documents.py --docs ./documents --content data/content.json
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from api.AppContainer import AppContainer
from errors.PortfolioErrors import PortfolioRAGError
from utility.logging_utils import get_logger

logger = get_logger("scripts.ingest_documents")


def main() -> int:
    parser = argparse.ArgumentParser(description="Ingest portfolio documents into the vector index.")
    parser.add_argument("--docs", type=Path, help="Directory of .pdf/.txt/.md files (searched recursively)")
    parser.add_argument("--content", type=Path, help="Structured content JSON file")
    parser.add_argument("--no-structured", action="store_true", help="Skip the structured content records")
    parser.add_argument("--skip-failed", action="store_true", help="Skip unreadable files instead of aborting")
    parser.add_argument("--chunk-size", type=int, default=None)
    parser.add_argument("--chunk-overlap", type=int, default=None)
    args = parser.parse_args()

    overrides = {}
    if args.chunk_size is not None:
        overrides["chunk_size"] = args.chunk_size
    if args.chunk_overlap is not None:
        overrides["chunk_overlap"] = args.chunk_overlap

    container = AppContainer(content_path=args.content, **overrides)
    service = container.ingest_service

    total = 0
    try:
        if args.docs:
            total += service.ingest_directory(args.docs, skip_failed=args.skip_failed)
        if not args.no_structured:
            total += service.ingest_structured(container.content)
    except PortfolioRAGError as e:
        logger.error("Ingestion aborted: %s", e)
        return 1

    logger.info("Ingestion complete: %d records upserted", total)
    return 0


if __name__ == "__main__":
    sys.exit(main())
