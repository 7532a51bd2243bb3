# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: ChromaPortfolioVectorStore
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import chromadb
from chromadb import ClientAPI

from config.Config import Config
from embedding.EmbeddingRecord import EmbeddingRecord
from utility.logging_utils import get_class_logger
from vectorstore.PortfolioVectorStore import PortfolioVectorStore, VectorMatch


def build_chroma_client(cfg: Config) -> ClientAPI:
    """Chroma Cloud when credentials are set, otherwise a local persistent client."""
    if cfg.has_chroma_cloud:
        return chromadb.CloudClient(
            tenant=cfg.chroma_tenant,
            database=cfg.chroma_database,
            api_key=cfg.chroma_api_key,
        )
    if cfg.chroma_persist_dir:
        return chromadb.PersistentClient(path=cfg.chroma_persist_dir)
    raise ValueError("Config has neither Chroma Cloud credentials nor CHROMA_PERSIST_DIR")


@dataclass
class ChromaPortfolioVectorStore(PortfolioVectorStore):
    cfg: Config
    collection_name: str = "portfolio-chatbot"
    client: Optional[Any] = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        if self.client is None:
            self.logger.info(
                "Initialising Chroma client (cloud=%s, tenant=%s, database=%s, persist_dir=%s)",
                self.cfg.has_chroma_cloud,
                self.cfg.chroma_tenant or None,
                self.cfg.chroma_database or None,
                self.cfg.chroma_persist_dir or None,
            )
            self.client = build_chroma_client(self.cfg)

        self._collection = None

    def _get_collection(self, *, create: bool):
        # Query time must not create an empty index; a missing collection is an error there
        if self._collection is not None:
            return self._collection

        if create:
            self._collection = self.client.get_or_create_collection(
                name=self.collection_name,
                metadata={"hnsw:space": "cosine"},
            )
            self.logger.info("Chroma collection ready: '%s'", self.collection_name)
        else:
            self._collection = self.client.get_collection(name=self.collection_name)
        return self._collection

    def test_connection(self) -> bool:
        """
        Simple health check: can we talk to Chroma and our collection?
        """
        try:
            _ = self._get_collection(create=False).count()
            return True
        except Exception as e:
            self.logger.error("Chroma connection failed: %s", e)
            return False

    def count(self) -> int:
        return self._get_collection(create=False).count()

    def upsert(self, records: Sequence[EmbeddingRecord]) -> None:
        if not records:
            return

        ids: List[str] = []
        documents: List[str] = []
        embeddings: List[List[float]] = []
        metadatas: List[Dict[str, Any]] = []

        for rec in records:
            ids.append(rec.id)
            documents.append(rec.text)
            embeddings.append(rec.vector_as_list())
            # Chroma rejects None metadata values
            metadatas.append({k: v for k, v in rec.metadata.items() if v is not None})

        self._get_collection(create=True).upsert(
            ids=ids,
            documents=documents,
            embeddings=embeddings,
            metadatas=metadatas,
        )
        self.logger.info(
            "Upserted %d records into Chroma collection '%s'",
            len(records),
            self.collection_name,
        )

    def query_vector(self, vector: Sequence[float], top_k: int = 5) -> List[VectorMatch]:
        self.logger.debug(
            "Querying Chroma collection '%s' (top_k=%d, dim=%d)",
            self.collection_name,
            top_k,
            len(vector),
        )

        res = self._get_collection(create=False).query(
            query_embeddings=[list(vector)],
            n_results=top_k,
            include=["metadatas", "distances"],
        )

        ids = (res.get("ids") or [[]])[0] or []
        metas = (res.get("metadatas") or [[]])[0] or []
        dists = (res.get("distances") or [[]])[0] or []

        matches: List[VectorMatch] = []
        for i, match_id in enumerate(ids):
            md = metas[i] if i < len(metas) and isinstance(metas[i], dict) else {}
            dist = dists[i] if i < len(dists) else None
            # cosine space: distance = 1 - similarity
            score = 1.0 - float(dist) if dist is not None else 0.0
            matches.append(VectorMatch(id=match_id, score=score, metadata=dict(md)))

        matches.sort(key=lambda m: m.score, reverse=True)
        self.logger.info(
            "Chroma search complete: returned %d results (requested %d)",
            len(matches),
            top_k,
        )
        return matches
