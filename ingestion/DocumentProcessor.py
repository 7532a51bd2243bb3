# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-05
# Description: DocumentProcessor
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Optional

from chunking.PortfolioChunk import PortfolioChunk
from chunking.PortfolioChunker import PortfolioChunker
from content.PortfolioContent import About, Education, Experience, Project, StructuredContent
from document.SourceDocument import (
    KIND_ABOUT,
    KIND_EDUCATION,
    KIND_EXPERIENCE,
    KIND_MARKDOWN,
    KIND_PDF,
    KIND_PROJECT,
    KIND_STRUCTURED,
    KIND_TEXT,
    SourceDocument,
    kind_for_path,
)
from errors.PortfolioErrors import IngestionError
from extractor.PortfolioTextExtractor import PortfolioTextExtractor
from utility.logging_utils import get_class_logger


def _lines(*pairs: tuple[str, object]) -> str:
    return "\n".join(f"{label}: {value}" for label, value in pairs).strip()


def _joined(values, sep: str = ", ") -> str:
    return sep.join(values)


class DocumentProcessor:
    """
    Turns raw source material into PortfolioChunk sequences:
      - pdf / text: normalise + sentence-accumulation chunking
      - markdown: heading sections, oversized sections chunked
      - structured content: one chunk per record, no splitting
    """

    def __init__(
        self,
        *,
        chunker: Optional[PortfolioChunker] = None,
        extractor: Optional[PortfolioTextExtractor] = None,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        logger: logging.Logger | None = None,
    ) -> None:
        self.chunker = chunker or PortfolioChunker(chunk_size=chunk_size, chunk_overlap=chunk_overlap)
        self.extractor = extractor or PortfolioTextExtractor()
        self.logger = logger or get_class_logger(self.__class__)

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------
    def process(self, source: SourceDocument | str | Path) -> List[PortfolioChunk]:
        """Chunk a single document. Read/parse failures raise IngestionError."""
        if isinstance(source, SourceDocument):
            doc = source
        else:
            try:
                doc = SourceDocument.from_path(source)
            except ValueError as e:
                raise IngestionError(str(e), source) from e

        if doc.kind == KIND_STRUCTURED:
            if not isinstance(doc.content, StructuredContent):
                raise IngestionError("structured document carries no StructuredContent", doc.source)
            return self.process_structured(doc.content, source=doc.source)

        try:
            text = self._read(doc)
        except Exception as e:
            self.logger.error("Failed to read %s document '%s': %s", doc.kind, doc.source, e)
            raise IngestionError(f"Failed to read {doc.kind} document '{doc.source}': {e}", doc.path or doc.source) from e

        if doc.kind == KIND_MARKDOWN:
            return self.chunker.chunk_markdown_document(text, source=doc.source, kind=KIND_MARKDOWN)
        return self.chunker.chunk_document(text, source=doc.source, kind=doc.kind)

    def _read(self, doc: SourceDocument) -> str:
        if doc.kind == KIND_PDF:
            if doc.content is not None:
                return "\n".join(self.extractor.extract_text_from_pdf(doc.content))
            return self.extractor.read_pdf(doc.path)
        if doc.kind in (KIND_TEXT, KIND_MARKDOWN):
            if doc.content is not None:
                return str(doc.content)
            return self.extractor.read_text(doc.path)
        raise ValueError(f"Unsupported document kind: {doc.kind!r}")

    def iter_supported_files(self, root: str | Path) -> Iterator[Path]:
        """Depth-first walk yielding files with a supported extension, in sorted order."""
        root_path = Path(root)
        try:
            entries = sorted(root_path.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise IngestionError(f"Cannot list directory '{root_path}': {e}", root_path) from e

        for entry in entries:
            if entry.is_dir():
                yield from self.iter_supported_files(entry)
            elif kind_for_path(entry) is not None:
                yield entry
            else:
                self.logger.debug("Skipping unsupported file: %s", entry)

    def process_directory(self, root: str | Path) -> List[PortfolioChunk]:
        """
        Recursively chunk every supported file under `root`.
        The first failing file aborts the walk with IngestionError.
        """
        chunks: List[PortfolioChunk] = []
        files = 0
        for path in self.iter_supported_files(root):
            chunks.extend(self.process(path))
            files += 1

        self.logger.info("Processed directory '%s': files=%d chunks=%d", root, files, len(chunks))
        return chunks

    # ------------------------------------------------------------------
    # Structured content
    # ------------------------------------------------------------------
    @staticmethod
    def render_project(project: Project) -> str:
        return _lines(
            ("Project", project.title),
            ("Description", project.short_description),
            ("Technologies", _joined(project.tech)),
            ("Role", project.role),
            ("Date", project.date_range),
            ("Problem", project.problem or ""),
            ("Solution", project.solution or ""),
            ("Contribution", project.my_contribution or ""),
            ("Features", _joined(project.features)),
            ("Learnings", _joined(project.learned)),
        )

    @staticmethod
    def render_experience(exp: Experience) -> str:
        impact = _joined(f"{k}: {v}" for k, v in exp.impact.items())
        return _lines(
            ("Experience", f"{exp.role} at {exp.company}"),
            ("Period", exp.period),
            ("Responsibilities", _joined(exp.responsibilities, ". ")),
            ("Technologies", _joined(exp.stack)),
            ("Impact", impact),
        )

    @staticmethod
    def render_education(edu: Education) -> str:
        return _lines(
            ("Education", f"{edu.degree_level} in {edu.program}"),
            ("Institution", edu.institution),
            ("Period", edu.period),
            ("Courses", _joined(edu.courses)),
            ("Projects", _joined(edu.projects)),
        )

    @staticmethod
    def render_about(about: About) -> str:
        skills = "\n".join(f"{category}: {_joined(items)}" for category, items in about.skills.items())
        contact = about.contact
        return "\n".join([
            f"About: {about.name} - {about.headline}",
            f"Bio: {about.bio}",
            "Skills:",
            skills,
            "Contact:",
            f"Email: {contact.email}",
            f"Phone: {contact.phone or ''}",
            f"GitHub: {contact.github}",
            f"LinkedIn: {contact.linkedin}",
        ]).strip()

    def process_structured(self, content: StructuredContent, source: str = "website") -> List[PortfolioChunk]:
        """One chunk per project, experience, education entry and the about summary."""
        blocks: List[tuple[str, str]] = []
        blocks.extend((KIND_PROJECT, self.render_project(p)) for p in content.projects)
        blocks.extend((KIND_EXPERIENCE, self.render_experience(e)) for e in content.experience)
        blocks.extend((KIND_EDUCATION, self.render_education(e)) for e in content.education)
        blocks.append((KIND_ABOUT, self.render_about(content.about)))

        total = len(blocks)
        chunks = [
            PortfolioChunk(text=text, source=source, kind=kind, chunk_index=i, total_chunks=total)
            for i, (kind, text) in enumerate(blocks)
        ]
        self.logger.info(
            "Processed structured content '%s': projects=%d experience=%d education=%d chunks=%d",
            source,
            len(content.projects),
            len(content.experience),
            len(content.education),
            total,
        )
        return chunks
