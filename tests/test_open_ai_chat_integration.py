# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-17
# Description: test_open_ai_chat_integration.py
# -----------------------------------------------------------------------------
import os

import pytest

from chat.OpenAIChat import OpenAIChat
from config.Config import Config
from embedding.PortfolioEmbedder import PortfolioEmbedder


def _skip_if_missing_prereqs():
    missing = [name for name in Config.OPENAI_ENV_VARS if not os.getenv(name)]
    if missing:
        pytest.skip(f"Missing env vars for OpenAI: {', '.join(missing)}")


@pytest.mark.integration
def test_openai_chat_simple_roundtrip():
    """
    Integration test:
      - instantiate OpenAIChat from the environment
      - send a tiny prompt
      - verify text comes back
    """
    _skip_if_missing_prereqs()

    cfg = Config.from_env()
    chat = OpenAIChat(cfg=cfg, model=cfg.openai_chat_model or "gpt-4o-mini")

    answer = chat.complete(
        "You are a test assistant.",
        "Reply with a single word: OK",
        temperature=0.0,
        max_tokens=5,
    )

    assert answer.strip().upper().startswith("OK")


@pytest.mark.integration
def test_openai_embeddings_are_unit_length():
    _skip_if_missing_prereqs()

    embedder = PortfolioEmbedder(Config.from_env())
    vectors = embedder.embed_texts(["hello world", "portfolio"])

    assert vectors.shape[0] == 2
    assert abs(float((vectors[0] ** 2).sum()) - 1.0) < 1e-3
