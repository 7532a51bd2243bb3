# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-13
# Description: conftest.py
# -----------------------------------------------------------------------------

import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from config.Config import Config  # noqa: E402
from content.PortfolioContent import StructuredContent  # noqa: E402
from embedding.EmbeddingRecord import EmbeddingRecord  # noqa: E402
from embedding.PortfolioEmbedder import PortfolioEmbedder  # noqa: E402
from vectorstore.PortfolioVectorStore import VectorMatch  # noqa: E402

SAMPLE_CONTENT: Dict[str, Any] = {
    "about": {
        "name": "Sam Taylor",
        "headline": "a Software Engineer",
        "bio": "Engineer focused on search and language models.",
        "skills": {
            "Languages": ["Python", "Go"],
            "AI/ML": ["PyTorch", "RAG"],
        },
        "contact": {
            "email": "sam@example.com",
            "phone": "+1 555 0199",
            "github": "https://github.com/sam",
            "linkedin": "https://linkedin.com/in/sam",
        },
    },
    "apps": [
        {
            "id": "finder",
            "title": "Finder",
            "shortDescription": "Semantic search for notes",
            "tech": ["Python", "Chroma"],
            "role": "Author",
            "dateRange": "2024",
            "myContribution": "Wrote everything.",
            "features": ["Search"],
            "learned": ["Embeddings"],
        }
    ],
    "experience": [
        {
            "id": "acme",
            "company": "Acme Corp",
            "role": "ML Engineer",
            "period": "2022 - Present",
            "tags": ["NLP"],
            "responsibilities": ["Built ranking models."],
            "stack": ["Python", "PyTorch"],
            "impact": {"latencyReductionPct": 30},
        },
        {
            "id": "initech",
            "company": "Initech",
            "role": "Backend Engineer",
            "period": "2019 - 2022",
            "responsibilities": ["Kept TPS reports flowing."],
            "stack": ["Java"],
        },
    ],
    "education": [
        {
            "id": "uni",
            "institution": "Example University",
            "program": "Computer Science",
            "degreeLevel": "BSc",
            "period": "2015 - 2019",
            "courses": ["Algorithms"],
            "projects": ["Compiler"],
        }
    ],
}


@pytest.fixture
def content() -> StructuredContent:
    return StructuredContent.model_validate(SAMPLE_CONTENT)


@pytest.fixture
def cfg() -> Config:
    return Config(openai_api_key="sk-test")


class FakeEmbeddingsAPI:
    """Stands in for client.embeddings; deterministic bag-of-letters vectors."""

    def __init__(self, fail_with: Optional[Exception] = None):
        self.fail_with = fail_with
        self.calls: List[List[str]] = []

    @staticmethod
    def vectorize(text: str) -> List[float]:
        vec = [0.0] * 26
        for ch in text.lower():
            if "a" <= ch <= "z":
                vec[ord(ch) - ord("a")] += 1.0
        vec[0] += 1e-3  # never all-zero
        return vec

    def create(self, model: str, input: Sequence[str]):
        self.calls.append(list(input))
        if self.fail_with is not None:
            raise self.fail_with
        return SimpleNamespace(
            data=[SimpleNamespace(index=i, embedding=self.vectorize(t)) for i, t in enumerate(input)]
        )


class FakeOpenAIClient:
    def __init__(self, fail_with: Optional[Exception] = None):
        self.embeddings = FakeEmbeddingsAPI(fail_with=fail_with)


@pytest.fixture
def fake_openai() -> FakeOpenAIClient:
    return FakeOpenAIClient()


@pytest.fixture
def embedder(cfg, fake_openai) -> PortfolioEmbedder:
    return PortfolioEmbedder(cfg, client=fake_openai)


class InMemoryVectorStore:
    """Cosine-similarity store keyed by record id."""

    def __init__(self, fail_on_query: Optional[Exception] = None, fail_on_upsert_call: Optional[int] = None):
        self.records: Dict[str, EmbeddingRecord] = {}
        self.fail_on_query = fail_on_query
        self.fail_on_upsert_call = fail_on_upsert_call
        self.upsert_calls = 0
        self.query_calls = 0

    def test_connection(self) -> bool:
        return True

    def count(self) -> int:
        return len(self.records)

    def upsert(self, records: Sequence[EmbeddingRecord]) -> None:
        self.upsert_calls += 1
        if self.fail_on_upsert_call == self.upsert_calls:
            raise RuntimeError("upsert rejected")
        for rec in records:
            self.records[rec.id] = rec

    def query_vector(self, vector: Sequence[float], top_k: int = 5) -> List[VectorMatch]:
        self.query_calls += 1
        if self.fail_on_query is not None:
            raise self.fail_on_query
        q = np.asarray(vector, dtype=np.float32)
        q = q / (np.linalg.norm(q) + 1e-12)
        scored = []
        for rec in self.records.values():
            v = np.asarray(rec.vector, dtype=np.float32)
            v = v / (np.linalg.norm(v) + 1e-12)
            scored.append(VectorMatch(id=rec.id, score=float(q @ v), metadata=dict(rec.metadata)))
        scored.sort(key=lambda m: m.score, reverse=True)
        return scored[:top_k]


@pytest.fixture
def vector_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


class EchoChatClient:
    """Returns the user message so tests can inspect the composed prompt."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []

    def complete(self, system_message: str, user_message: str, temperature: float = 0.7, max_tokens: int = 500) -> str:
        self.calls.append({
            "system": system_message,
            "prompt": user_message,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        return user_message


class RaisingChatClient:
    def __init__(self, exc: Exception):
        self.exc = exc
        self.calls = 0

    def complete(self, system_message: str, user_message: str, temperature: float = 0.7, max_tokens: int = 500) -> str:
        self.calls += 1
        raise self.exc
