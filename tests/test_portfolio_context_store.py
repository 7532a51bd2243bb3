# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-14
# Description: test_portfolio_context_store.py
# -----------------------------------------------------------------------------
import numpy as np
import pytest

from embedding.EmbeddingRecord import EmbeddingRecord
from embedding.PortfolioEmbedder import PortfolioEmbedder
from errors.PortfolioErrors import EmbeddingError, IndexUnavailable, RetrievalError
from services.PortfolioContextStore import PortfolioContextStore

from conftest import FakeOpenAIClient, InMemoryVectorStore


def _record(rec_id: str, text: str | None, vector) -> EmbeddingRecord:
    metadata = {"source": "test", "kind": "text"}
    if text is not None:
        metadata["text"] = text
    return EmbeddingRecord(id=rec_id, vector=np.asarray(vector, dtype=np.float32), metadata=metadata)


def test_embedder_normalizes_and_keeps_order(embedder, fake_openai):
    arr = embedder.embed_texts(["abc", "zzz"])

    assert arr.shape == (2, 26)
    assert np.allclose(np.linalg.norm(arr, axis=1), 1.0, atol=1e-5)
    assert arr[1][25] > 0.99
    assert fake_openai.embeddings.calls == [["abc", "zzz"]]


def test_embedder_wraps_backend_failure(cfg):
    embedder = PortfolioEmbedder(cfg, client=FakeOpenAIClient(fail_with=RuntimeError("quota exceeded")))
    with pytest.raises(EmbeddingError):
        embedder.embed("hello")


def test_query_returns_texts_by_descending_similarity(embedder, vector_store):
    store = PortfolioContextStore(embedder=embedder, store=vector_store)
    texts = ["python python python", "kubernetes clusters", "pythonic code"]
    store.upsert([
        _record(f"r{i}", t, embedder.embed_texts([t])[0]) for i, t in enumerate(texts)
    ])

    results = store.query("python", top_k=2)

    assert len(results) == 2
    assert results[0] == "python python python"
    assert "kubernetes clusters" not in results


def test_matches_without_text_are_filtered(embedder, vector_store):
    store = PortfolioContextStore(embedder=embedder, store=vector_store)
    vec = embedder.embed_texts(["aaa"])[0]
    store.upsert([_record("no-text", None, vec), _record("blank", "   ", vec), _record("ok", "aaa", vec)])

    assert store.query("aaa") == ["aaa"]


def test_missing_backend_degrades_to_empty(embedder):
    store = PortfolioContextStore(embedder=embedder, store=None)
    result = store.retrieve("anything")

    assert result.contexts == []
    assert isinstance(result.error, IndexUnavailable)
    assert store.query("anything") == []


def test_embedding_failure_degrades_to_empty(cfg, vector_store):
    failing = PortfolioEmbedder(cfg, client=FakeOpenAIClient(fail_with=RuntimeError("network down")))
    store = PortfolioContextStore(embedder=failing, store=vector_store)

    result = store.retrieve("anything")

    assert isinstance(result.error, EmbeddingError)
    assert result.contexts == []
    assert vector_store.query_calls == 0


def test_search_failure_degrades_to_empty(embedder):
    broken = InMemoryVectorStore(fail_on_query=RuntimeError("404 index not found"))
    store = PortfolioContextStore(embedder=embedder, store=broken)

    result = store.retrieve("anything")

    assert isinstance(result.error, RetrievalError)
    assert "404" in result.detail
    assert store.query("anything") == []


def test_zero_matches_is_not_an_error(embedder, vector_store):
    result = PortfolioContextStore(embedder=embedder, store=vector_store).retrieve("anything")
    assert result.ok
    assert result.is_empty


def test_upsert_commits_in_batches_of_at_most_100(embedder, vector_store):
    store = PortfolioContextStore(embedder=embedder, store=vector_store)
    records = [_record(f"r{i}", f"text {i}", [1.0, 0.0]) for i in range(250)]

    written = store.upsert(records)

    assert written == 250
    assert vector_store.upsert_calls == 3
    assert vector_store.count() == 250


def test_upsert_is_idempotent_per_id(embedder, vector_store):
    store = PortfolioContextStore(embedder=embedder, store=vector_store)
    rec = _record("same", "text", [1.0, 0.0])
    store.upsert([rec])
    store.upsert([rec])
    assert vector_store.count() == 1


def test_failed_batch_keeps_earlier_batches(embedder):
    flaky = InMemoryVectorStore(fail_on_upsert_call=2)
    store = PortfolioContextStore(embedder=embedder, store=flaky)
    records = [_record(f"r{i}", f"text {i}", [1.0, 0.0]) for i in range(150)]

    with pytest.raises(RuntimeError):
        store.upsert(records)

    assert flaky.count() == 100


def test_upsert_without_backend_raises_index_unavailable(embedder):
    with pytest.raises(IndexUnavailable):
        PortfolioContextStore(embedder=embedder, store=None).upsert([])


def test_batch_size_above_backend_limit_is_rejected(embedder, vector_store):
    with pytest.raises(ValueError):
        PortfolioContextStore(embedder=embedder, store=vector_store, batch_size=101)


def test_explicit_top_k_is_honoured(embedder, vector_store):
    store = PortfolioContextStore(embedder=embedder, store=vector_store, top_k=5)
    vec = embedder.embed_texts(["aaa"])[0]
    store.upsert([_record(f"r{i}", f"aaa {i}", vec) for i in range(4)])

    assert len(store.query("aaa", top_k=1)) == 1
    assert len(store.query("aaa")) == 4


@pytest.mark.parametrize("top_k", [0, -1])
def test_non_positive_top_k_is_rejected(embedder, vector_store, top_k):
    store = PortfolioContextStore(embedder=embedder, store=vector_store)
    with pytest.raises(ValueError):
        store.retrieve("anything", top_k=top_k)
    with pytest.raises(ValueError):
        PortfolioContextStore(embedder=embedder, store=vector_store, top_k=top_k)
