# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from pathlib import Path
from typing import Optional

import settings
from chat.OpenAIChat import OpenAIChat
from chat.PromptBuilder import PromptBuilder
from config.Config import Config
from content.PortfolioContent import StructuredContent
from embedding.PortfolioEmbedder import PortfolioEmbedder
from fallback.FallbackContextSelector import FallbackContextSelector
from ingestion.DocumentProcessor import DocumentProcessor
from services.PortfolioChatService import PortfolioChatService
from services.PortfolioContextStore import PortfolioContextStore
from services.PortfolioHealthService import PortfolioHealthService
from services.PortfolioIngestService import PortfolioIngestService
from utility.logging_utils import get_class_logger
from vectorstore.ChromaPortfolioVectorStore import ChromaPortfolioVectorStore


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Built once at process start and handed to request handlers by reference.

    Backends are optional: no OpenAI key -> chat answers with the setup message,
    no Chroma configuration -> retrieval runs on the fallback selector.
    """

    def __init__(
        self,
        cfg: Optional[Config] = None,
        content: Optional[StructuredContent] = None,
        *,
        content_path: str | Path | None = None,
        chunk_size: int = settings.CHUNK_SIZE,
        chunk_overlap: int = settings.CHUNK_OVERLAP,
        index_name: str = settings.INDEX_NAME,
        top_k: int = settings.TOP_K,
        embedding_model: str = settings.EMBEDDING_MODEL,
    ) -> None:
        self.logger = get_class_logger(self.__class__)

        # Configuration
        self.cfg = cfg or Config.from_env()
        self.logger.info("Config: %s", self.cfg.summary())

        # Subject content (read-only)
        self.content = content if content is not None else StructuredContent.from_json_file(
            content_path or settings.CONTENT_PATH
        )

        # Embeddings + vector index (optional)
        self.embedder: Optional[PortfolioEmbedder] = None
        self.store: Optional[ChromaPortfolioVectorStore] = None
        if self.cfg.has_chat_credentials:
            self.embedder = PortfolioEmbedder(cfg=self.cfg, model=embedding_model)
        if self.cfg.has_vector_backend:
            self.store = ChromaPortfolioVectorStore(cfg=self.cfg, collection_name=index_name)
        else:
            self.logger.info("No vector backend configured; chat will run in fallback mode")

        self.context_store = PortfolioContextStore(
            embedder=self.embedder,
            store=self.store,
            top_k=top_k,
            batch_size=settings.INGEST_BATCH_SIZE,
        )

        # Ingestion pipeline
        self.processor = DocumentProcessor(chunk_size=chunk_size, chunk_overlap=chunk_overlap)
        self.ingest_service = PortfolioIngestService(
            processor=self.processor,
            embedder=self.embedder,
            context_store=self.context_store,
        )

        # Query pipeline
        self.fallback_selector = FallbackContextSelector(
            self.content,
            max_contexts=settings.FALLBACK_MAX_CONTEXTS,
        )
        self.prompt_builder = PromptBuilder(
            about=self.content.about,
            history_turns=settings.CHAT_DEFAULTS["history_turns"],
        )
        self.chat_client: Optional[OpenAIChat] = None
        if self.cfg.has_chat_credentials:
            self.chat_client = OpenAIChat(cfg=self.cfg, model=self.cfg.openai_chat_model or settings.CHAT_DEFAULTS["model"])
        else:
            self.logger.warning("OPENAI_API_KEY not found. Chat will answer with the setup message.")

        self.chat_service = PortfolioChatService(
            context_store=self.context_store,
            fallback_selector=self.fallback_selector,
            prompt_builder=self.prompt_builder,
            chat_client=self.chat_client,
            contact_email=self.content.contact_email,
            top_k=top_k,
            temperature=settings.CHAT_DEFAULTS["temperature"],
            max_tokens=settings.CHAT_DEFAULTS["max_tokens"],
        )

        self.health_service = PortfolioHealthService(cfg=self.cfg, store=self.store)
