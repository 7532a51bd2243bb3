# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: PortfolioChunker
# -----------------------------------------------------------------------------
import logging
import re
from typing import List

from chunking.PortfolioChunk import PortfolioChunk
from utility.logging_utils import get_class_logger

_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_WHITESPACE = re.compile(r"\s+")
# a run ending in terminal punctuation, or a trailing remainder without any
_SENTENCE = re.compile(r"[^.!?]*[.!?]+|[^.!?]+$")
_TOKEN = re.compile(r"\s*\S+")
_MARKDOWN_HEADING = re.compile(r"^#{1,6}\s")

# Rough characters-per-word used to turn a character overlap into a word count
CHARS_PER_WORD = 5


class PortfolioChunker:
    """
    Sentence-accumulating chunker with a word-based overlap window.

    Free text is normalised, split into sentence-like units and greedily packed
    into chunks of at most `chunk_size` characters. Each chunk after the first
    starts with the trailing `chunk_overlap // 5` words of its predecessor.
    """

    def __init__(
        self,
        *,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        logger: logging.Logger | None = None,
    ):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if chunk_overlap < 0:
            raise ValueError(f"chunk_overlap must not be negative, got {chunk_overlap}")

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.logger = logger or get_class_logger(self.__class__)

    @property
    def overlap_words(self) -> int:
        return self.chunk_overlap // CHARS_PER_WORD

    @staticmethod
    def normalize(text: str) -> str:
        cleaned = _EXCESS_NEWLINES.sub("\n\n", text or "")
        cleaned = _WHITESPACE.sub(" ", cleaned)
        return cleaned.strip()

    def split_units(self, cleaned: str) -> List[str]:
        """
        Sentence-like units whose concatenation is exactly `cleaned`.
        Units longer than chunk_size are broken at word boundaries.
        """
        if not cleaned:
            return []
        sentences = _SENTENCE.findall(cleaned) or [cleaned]

        units: List[str] = []
        for sentence in sentences:
            if len(sentence) <= self.chunk_size:
                units.append(sentence)
            else:
                units.extend(self._split_long_unit(sentence))
        return units

    def _split_long_unit(self, unit: str) -> List[str]:
        pieces: List[str] = []
        current = ""
        for token in _TOKEN.findall(unit):
            # a single word longer than the cap is cut by characters
            while len(token) > self.chunk_size:
                if current:
                    pieces.append(current)
                    current = ""
                pieces.append(token[: self.chunk_size])
                token = token[self.chunk_size:]
            if current and len(current) + len(token) > self.chunk_size:
                pieces.append(current)
                current = token
            else:
                current += token
        if current:
            pieces.append(current)
        return pieces

    def _overlap_prefix(self, closed_chunk: str) -> str:
        n = self.overlap_words
        if n <= 0:
            return ""
        return " ".join(closed_chunk.split(" ")[-n:])

    def chunk_text(self, text: str) -> List[str]:
        """Split free text into overlapping chunk strings."""
        chunks: List[str] = []
        current = ""

        for unit in self.split_units(self.normalize(text)):
            if current and len(current) + len(unit) > self.chunk_size:
                closed = current.strip()
                chunks.append(closed)

                overlap = self._overlap_prefix(closed)
                current = f"{overlap} {unit.lstrip()}" if overlap else unit.lstrip()
            else:
                current += unit

        if current.strip():
            chunks.append(current.strip())

        return chunks

    @staticmethod
    def split_markdown_sections(content: str) -> List[str]:
        """Split markdown at heading lines; each section keeps its heading as first line."""
        sections: List[str] = []
        current: List[str] = []

        for line in (content or "").split("\n"):
            if _MARKDOWN_HEADING.match(line):
                section = "\n".join(current).strip()
                if section:
                    sections.append(section)
                current = [line]
            else:
                current.append(line)

        section = "\n".join(current).strip()
        if section:
            sections.append(section)

        return sections

    def chunk_markdown(self, content: str) -> List[str]:
        pieces: List[str] = []
        for section in self.split_markdown_sections(content):
            if len(section) > self.chunk_size:
                pieces.extend(self.chunk_text(section))
            else:
                pieces.append(section)
        return pieces

    def build_chunks(self, pieces: List[str], *, source: str, kind: str) -> List[PortfolioChunk]:
        """Wrap chunk strings with provenance; indices are positional and contiguous."""
        total = len(pieces)
        chunks = [
            PortfolioChunk(text=piece, source=source, kind=kind, chunk_index=i, total_chunks=total)
            for i, piece in enumerate(pieces)
        ]

        if chunks:
            avg_len = sum(len(c.text) for c in chunks) / total
            self.logger.info(
                "Chunked source=%r kind=%s: chunks=%d avg_len=%.1f chars (size=%d overlap=%d)",
                source,
                kind,
                total,
                avg_len,
                self.chunk_size,
                self.chunk_overlap,
            )
        else:
            self.logger.warning("No chunks produced for source=%r kind=%s", source, kind)

        return chunks

    def chunk_document(self, text: str, *, source: str, kind: str) -> List[PortfolioChunk]:
        return self.build_chunks(self.chunk_text(text), source=source, kind=kind)

    def chunk_markdown_document(self, content: str, *, source: str, kind: str = "markdown") -> List[PortfolioChunk]:
        return self.build_chunks(self.chunk_markdown(content), source=source, kind=kind)
