# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: SourceDocument
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

KIND_PDF = "pdf"
KIND_TEXT = "text"
KIND_MARKDOWN = "markdown"
KIND_STRUCTURED = "structured"

# Chunk kinds produced from structured content
KIND_PROJECT = "project"
KIND_EXPERIENCE = "experience"
KIND_EDUCATION = "education"
KIND_ABOUT = "about"

EXTENSION_KINDS = {
    ".pdf": KIND_PDF,
    ".txt": KIND_TEXT,
    ".md": KIND_MARKDOWN,
}


def kind_for_path(path: str | Path) -> Optional[str]:
    """Return the document kind for a file extension, or None if unsupported."""
    return EXTENSION_KINDS.get(Path(path).suffix.lower())


@dataclass(frozen=True)
class SourceDocument:
    """
    A raw artifact to ingest: either a file on disk or an in-memory payload.
    `content` is bytes for PDFs, str for text/markdown, StructuredContent for structured.
    """
    kind: str
    source: str
    path: Optional[Path] = None
    content: Any = None

    @classmethod
    def from_path(cls, path: str | Path) -> "SourceDocument":
        p = Path(path)
        kind = kind_for_path(p)
        if kind is None:
            raise ValueError(f"Unsupported document type: {p.suffix!r} ({p})")
        return cls(kind=kind, source=p.name, path=p)
