# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: PortfolioIngestService.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from chunking.PortfolioChunk import PortfolioChunk
from content.PortfolioContent import StructuredContent
from embedding.PortfolioEmbedder import PortfolioEmbedder
from errors.PortfolioErrors import IndexUnavailable, IngestionError
from ingestion.DocumentProcessor import DocumentProcessor
from services.PortfolioContextStore import PortfolioContextStore
from utility.logging_utils import get_class_logger


class PortfolioIngestService:
    """
    Owns the offline ingest/index pipeline:
      - chunk (DocumentProcessor)
      - embed, one embeddings request per batch of <= 100 chunks
      - upsert batch by batch into the context store
    A failing batch aborts the run; earlier batches stay committed.
    """

    def __init__(
        self,
        *,
        processor: DocumentProcessor,
        embedder: PortfolioEmbedder | None,
        context_store: PortfolioContextStore,
        logger: logging.Logger | None = None,
    ) -> None:
        self.processor = processor
        self.embedder = embedder
        self.context_store = context_store
        self.logger = logger or get_class_logger(self.__class__)

    def ingest_chunks(self, chunks: Sequence[PortfolioChunk]) -> int:
        if self.embedder is None or self.context_store.store is None:
            raise IndexUnavailable(
                "Vector index is not configured. Provide OpenAI and Chroma credentials to ingest documents."
            )

        chunks = list(chunks)
        batch_size = self.context_store.batch_size
        total_batches = (len(chunks) + batch_size - 1) // batch_size
        written = 0

        for n, start in enumerate(range(0, len(chunks), batch_size), start=1):
            batch = chunks[start:start + batch_size]
            records = self.embedder.embed_chunks(batch)
            written += self.context_store.upsert(records)
            self.logger.info("Ingested batch %d of %d", n, total_batches)

        self.logger.info("Successfully ingested %d chunks", written)
        return written

    def ingest_directory(self, root: str | Path, *, skip_failed: bool = False) -> int:
        """
        Chunk and index every supported file under `root`.
        With skip_failed, unreadable files are logged and skipped instead of aborting.
        """
        if not skip_failed:
            return self.ingest_chunks(self.processor.process_directory(root))

        chunks: List[PortfolioChunk] = []
        failed = 0
        for path in self.processor.iter_supported_files(root):
            try:
                chunks.extend(self.processor.process(path))
            except IngestionError as e:
                failed += 1
                self.logger.error("Skipping '%s': %s", path, e)

        if failed:
            self.logger.warning("Directory ingest skipped %d unreadable file(s) under '%s'", failed, root)
        return self.ingest_chunks(chunks)

    def ingest_structured(self, content: StructuredContent, source: str = "website") -> int:
        return self.ingest_chunks(self.processor.process_structured(content, source=source))
