# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: settings.py
# -----------------------------------------------------------------------------
import os
from typing import Any, Dict


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Chunking
# -----------------------------------------------------------------------------
CHUNK_SIZE = _env_int("PORTFOLIO_CHUNK_SIZE", 1000)
CHUNK_OVERLAP = _env_int("PORTFOLIO_CHUNK_OVERLAP", 200)


# -----------------------------------------------------------------------------
# Embeddings / vector index
# -----------------------------------------------------------------------------
EMBEDDING_MODEL = _env("PORTFOLIO_EMBEDDING_MODEL", "text-embedding-3-small")

# Kept under the old name for existing deployments
INDEX_NAME = _env("PORTFOLIO_INDEX_NAME", "") or _env("PINECONE_INDEX_NAME", "portfolio-chatbot")

TOP_K = _env_int("PORTFOLIO_TOP_K", 5)

# Backend limit for a single upsert / embeddings request
INGEST_BATCH_SIZE = _env_int("PORTFOLIO_INGEST_BATCH_SIZE", 100)


# -----------------------------------------------------------------------------
# Chat defaults
# -----------------------------------------------------------------------------
CHAT_DEFAULTS: Dict[str, Any] = {
    "model": _env("OPENAI_CHAT_MODEL", "gpt-4o-mini"),
    "temperature": _env_float("PORTFOLIO_TEMPERATURE", 0.7),
    "max_tokens": _env_int("PORTFOLIO_MAX_TOKENS", 500),
    "history_turns": _env_int("PORTFOLIO_HISTORY_TURNS", 6),
}

FALLBACK_MAX_CONTEXTS = _env_int("PORTFOLIO_FALLBACK_MAX_CONTEXTS", 10)


# -----------------------------------------------------------------------------
# Content
# -----------------------------------------------------------------------------
CONTENT_PATH = _env("PORTFOLIO_CONTENT_PATH", "data/content.json")


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if CHUNK_SIZE <= 0:
    raise RuntimeError(f"PORTFOLIO_CHUNK_SIZE must be positive, got {CHUNK_SIZE}")

if CHUNK_OVERLAP < 0:
    raise RuntimeError(f"PORTFOLIO_CHUNK_OVERLAP must not be negative, got {CHUNK_OVERLAP}")

if not 1 <= INGEST_BATCH_SIZE <= 100:
    raise RuntimeError(f"PORTFOLIO_INGEST_BATCH_SIZE must be within 1..100, got {INGEST_BATCH_SIZE}")

if not INDEX_NAME:
    raise RuntimeError("INDEX_NAME resolved to empty value")
