# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-07
# Description: PortfolioContextStore.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from embedding.EmbeddingRecord import EmbeddingRecord
from embedding.PortfolioEmbedder import PortfolioEmbedder
from errors.PortfolioErrors import EmbeddingError, IndexUnavailable, PortfolioRAGError, RetrievalError
from utility.logging_utils import get_class_logger
from vectorstore.PortfolioVectorStore import PortfolioVectorStore

MAX_UPSERT_BATCH = 100


@dataclass(frozen=True)
class RetrievalResult:
    """
    Outcome of a vector search: either contexts, or the reason there are none.
    An empty `contexts` with no `error` means the index answered with zero matches.

    `error` is one of IndexUnavailable, EmbeddingError or RetrievalError.
    """
    contexts: List[str] = field(default_factory=list)
    error: Optional[PortfolioRAGError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def detail(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None

    @property
    def is_empty(self) -> bool:
        return not self.contexts


class PortfolioContextStore:
    """
    Embedding index facade: embeds text, commits records in bounded batches and
    answers nearest-neighbour queries. Works without a vector backend, in which
    case every retrieval reports IndexUnavailable.
    """

    def __init__(
        self,
        *,
        embedder: Optional[PortfolioEmbedder],
        store: Optional[PortfolioVectorStore],
        top_k: int = 5,
        batch_size: int = MAX_UPSERT_BATCH,
        logger: logging.Logger | None = None,
    ) -> None:
        if not 1 <= batch_size <= MAX_UPSERT_BATCH:
            raise ValueError(f"batch_size must be within 1..{MAX_UPSERT_BATCH}, got {batch_size}")
        if top_k < 1:
            raise ValueError(f"top_k must be positive, got {top_k}")
        self.embedder = embedder
        self.store = store
        self.top_k = top_k
        self.batch_size = batch_size
        self.logger = logger or get_class_logger(self.__class__)

    @property
    def available(self) -> bool:
        return self.embedder is not None and self.store is not None

    def embed(self, text: str) -> List[float]:
        if self.embedder is None:
            raise EmbeddingError("No embedding backend configured")
        return self.embedder.embed(text)

    def upsert(self, records: Sequence[EmbeddingRecord]) -> int:
        """
        Commit records batch by batch. A failing batch raises; batches committed
        before it stay committed. Returns the number of records written.
        """
        if self.store is None:
            raise IndexUnavailable("No vector index configured; set Chroma credentials to ingest")

        records = list(records)
        total_batches = (len(records) + self.batch_size - 1) // self.batch_size
        written = 0
        for n, start in enumerate(range(0, len(records), self.batch_size), start=1):
            batch = records[start:start + self.batch_size]
            self.store.upsert(batch)
            written += len(batch)
            self.logger.info("Upserted batch %d of %d (%d records)", n, total_batches, len(batch))
        return written

    def retrieve(self, text: str, top_k: Optional[int] = None) -> RetrievalResult:
        """Vector search returning an explicit result; never raises for backend failures."""
        k = self.top_k if top_k is None else top_k
        if k < 1:
            raise ValueError(f"top_k must be positive, got {k}")

        if not self.available:
            self.logger.info("Vector index not configured; retrieval degraded to fallback")
            return RetrievalResult(error=IndexUnavailable("No vector index configured"))

        try:
            vector = self.embedder.embed(text)
        except EmbeddingError as e:
            self.logger.warning("Query embedding failed, no vector context: %s", e)
            return RetrievalResult(error=e)

        try:
            matches = self.store.query_vector(vector, top_k=k)
        except Exception as e:
            if "404" in str(e) or "not found" in str(e).lower() or "does not exist" in str(e).lower():
                self.logger.warning(
                    "Vector index not found, using fallback context. "
                    "Ingest documents or remove the Chroma configuration to silence this: %s", e
                )
            else:
                self.logger.error("Error searching vector store: %s", e, exc_info=True)
            return RetrievalResult(error=RetrievalError(f"Vector search failed: {e}"))

        contexts = [m.text for m in matches if m.text.strip()][:k]
        dropped = len(matches) - len(contexts)
        if dropped > 0:
            self.logger.debug("Dropped %d matches without text metadata", dropped)

        self.logger.info("Vector retrieval: %d contexts (top_k=%d)", len(contexts), k)
        return RetrievalResult(contexts=contexts)

    def query(self, text: str, top_k: Optional[int] = None) -> List[str]:
        """Chunk texts ordered by descending similarity; empty on any failure."""
        return self.retrieve(text, top_k=top_k).contexts
