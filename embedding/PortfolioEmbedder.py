# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: PortfolioEmbedder
# -----------------------------------------------------------------------------
import uuid
from typing import Any, List, Optional, Sequence

import numpy as np
from openai import OpenAI

from chunking.PortfolioChunk import PortfolioChunk
from config.Config import Config
from embedding.EmbeddingRecord import EmbeddingRecord
from errors.PortfolioErrors import CredentialMissing, EmbeddingError
from utility.logging_utils import get_class_logger


class PortfolioEmbedder:
    """
    OpenAI embeddings with a fixed model identifier.

    Failures surface as EmbeddingError; there is no retry here, retry policy
    belongs to whoever calls the pipeline.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            model: str = "text-embedding-3-small",
            normalize: bool = True,
            client: Optional[Any] = None,
            logger=None,
    ):
        self.cfg = cfg
        self.model = model
        self.normalize = normalize
        self.logger = logger or get_class_logger(self.__class__)

        if client is not None:
            self.client = client
        else:
            if not cfg.openai_api_key:
                raise CredentialMissing("Config is missing openai_api_key for embeddings")
            self.client = OpenAI(
                api_key=cfg.openai_api_key,
                base_url=cfg.openai_base_url or None,
                organization=cfg.openai_org or None,
            )

        self.logger.info("PortfolioEmbedder initialised (model=%s, normalize=%s)", self.model, self.normalize)

    def embed_texts(self, texts: Sequence[str]) -> np.ndarray:
        """One embeddings request for the whole sequence; rows follow input order."""
        if not texts:
            return np.empty((0, 0), dtype=np.float32)

        try:
            resp = self.client.embeddings.create(model=self.model, input=list(texts))
        except Exception as e:
            self.logger.error("Embedding request failed (n=%d, model=%s): %s", len(texts), self.model, e)
            raise EmbeddingError(f"Failed to create embedding: {e}") from e

        data = sorted(resp.data, key=lambda d: getattr(d, "index", 0))
        arr = np.asarray([d.embedding for d in data], dtype=np.float32)
        if arr.shape[0] != len(texts):
            raise EmbeddingError(f"Embedding backend returned {arr.shape[0]} vectors for {len(texts)} inputs")

        # Normalize vectors (cosine-friendly)
        if self.normalize:
            norms = np.linalg.norm(arr, axis=1, keepdims=True) + 1e-12
            arr = arr / norms

        return arr

    def embed(self, text: str) -> List[float]:
        return self.embed_texts([text])[0].tolist()

    def embed_chunks(self, chunks: Sequence[PortfolioChunk]) -> List[EmbeddingRecord]:
        """
        Chunks -> EmbeddingRecord list, each under a fresh unique id.
        Empty chunks are dropped.
        """
        items = [c for c in chunks if c.text and c.text.strip()]
        if not items:
            return []

        arr = self.embed_texts([c.text for c in items])
        records = [
            EmbeddingRecord(
                id=f"{c.source}-{c.chunk_index}-{uuid.uuid4().hex}",
                vector=v,
                metadata=c.to_metadata(),
            )
            for c, v in zip(items, arr)
        ]
        self.logger.debug("Embedded %d chunks", len(records))
        return records
