# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: PortfolioErrors
# -----------------------------------------------------------------------------
from pathlib import Path
from typing import Optional


class PortfolioRAGError(Exception):
    """Base class for errors raised by the retrieval pipeline."""


class IngestionError(PortfolioRAGError):
    """Reading or parsing a single source document failed."""

    def __init__(self, message: str, source: Optional[str | Path] = None):
        super().__init__(message)
        self.source = str(source) if source is not None else None


class EmbeddingError(PortfolioRAGError):
    """The embedding backend call failed (network, auth, quota)."""


class IndexUnavailable(PortfolioRAGError):
    """No vector backend is configured. Query-time this is a degraded mode, not a failure."""


class RetrievalError(PortfolioRAGError):
    """The vector backend failed while searching (unreachable index, missing collection)."""


class CredentialMissing(PortfolioRAGError):
    """An OpenAI client was requested without an OpenAI key configured."""


class CredentialInvalid(PortfolioRAGError):
    """The language-model backend rejected the configured credential."""


class GenerationError(PortfolioRAGError):
    """Any other failure from the language-model backend."""
