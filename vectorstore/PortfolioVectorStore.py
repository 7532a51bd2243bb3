# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: PortfolioVectorStore
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Sequence, runtime_checkable

from embedding.EmbeddingRecord import EmbeddingRecord


@dataclass(frozen=True)
class VectorMatch:
    id: str
    score: float  # cosine similarity, higher is closer
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return str(self.metadata.get("text") or "")


@runtime_checkable
class PortfolioVectorStore(Protocol):
    def test_connection(self) -> bool:
        ...

    def upsert(self, records: Sequence[EmbeddingRecord]) -> None:
        ...

    def query_vector(self, vector: Sequence[float], top_k: int = 5) -> List[VectorMatch]:
        ...

    def count(self) -> int:
        ...
