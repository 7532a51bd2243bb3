# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: PortfolioChunk
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class PortfolioChunk:
    """
    A bounded span of source text tagged with provenance.
    Immutable once produced; handed to the embedding index as-is.
    """

    text: str
    source: str
    kind: str
    chunk_index: int
    total_chunks: int

    def __post_init__(self) -> None:
        if not 0 <= self.chunk_index < self.total_chunks:
            raise ValueError(
                f"chunk_index ({self.chunk_index}) must be within [0, total_chunks={self.total_chunks})"
            )

    def to_metadata(self) -> Dict[str, Any]:
        """Metadata stored next to the vector; `text` is what retrieval returns."""
        return {
            "text": self.text,
            "source": self.source,
            "kind": self.kind,
            "chunk_index": self.chunk_index,
            "total_chunks": self.total_chunks,
        }

    def short_preview(self, n: int = 120) -> str:
        """Return a compact text preview for logging/debugging."""
        clean = " ".join(self.text.split())
        preview = (clean[:n] + "...") if len(clean) > n else clean
        return f"[{self.kind} | {self.source} #{self.chunk_index}] {preview}"
