# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: EmbeddingRecord
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, List

import numpy as np


@dataclass(frozen=True)
class EmbeddingRecord:
    """Embedding vector + searchable metadata (metadata['text'] holds the chunk text)."""
    id: str
    vector: np.ndarray
    metadata: Dict[str, Any]

    @property
    def text(self) -> str:
        return str(self.metadata.get("text") or "")

    def vector_as_list(self) -> List[float]:
        vec = self.vector
        if hasattr(vec, "tolist"):
            vec = vec.tolist()
        return [float(v) for v in vec]
