# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: PortfolioChatService.py
# -----------------------------------------------------------------------------
import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple, Union

import openai

from chat.PromptBuilder import ConversationTurn, PromptBuilder
from errors.PortfolioErrors import CredentialInvalid, EmbeddingError, GenerationError, IndexUnavailable
from fallback.FallbackContextSelector import FallbackContextSelector
from services.PortfolioContextStore import PortfolioContextStore
from utility.logging_utils import get_class_logger

SOURCE_VECTOR = "vector"
SOURCE_FALLBACK = "fallback"
SOURCE_NONE = "none"

_CREDENTIAL_PATTERN = re.compile(r"\b(401|unauthori[sz]ed|api[ _-]?key|authentication|credentials?)\b", re.IGNORECASE)

HistoryItem = Union[ConversationTurn, Mapping[str, str]]


class ChatClient(Protocol):
    def complete(self, system_message: str, user_message: str, temperature: float, max_tokens: int) -> str:
        ...


def _to_turns(history: Optional[Sequence[HistoryItem]]) -> List[ConversationTurn]:
    turns: List[ConversationTurn] = []
    for item in history or []:
        if isinstance(item, ConversationTurn):
            turns.append(item)
        elif isinstance(item, Mapping) and "role" in item:
            turns.append(ConversationTurn(role=item["role"], content=str(item.get("content", ""))))
        else:
            raise ValueError(f"history item must be a turn with a 'role', got {item!r}")
    return turns


class PortfolioChatService:
    """
    Query orchestrator:
        - guards on a missing language-model credential
        - retrieves context from the vector index, else the fallback selector
        - builds the grounding prompt (PromptBuilder)
        - calls the chat client and returns its text verbatim
        - turns credential failures into a fixed apology, re-raises the rest
    Stateless per call; history is supplied by the caller each time.
    """

    not_configured_message: str = (
        "I'm currently not configured properly. Please set up the OpenAI API key to enable the chatbot. "
        "In the meantime, feel free to explore the portfolio or reach out directly at {email}!"
    )
    connection_trouble_message: str = (
        "I'm having trouble connecting to my AI backend. Please make sure the API keys are configured "
        "correctly. You can still reach out directly at {email}!"
    )
    empty_completion_message: str = "Sorry, I could not generate a response."

    def __init__(
        self,
        *,
        context_store: PortfolioContextStore,
        fallback_selector: FallbackContextSelector,
        prompt_builder: PromptBuilder,
        chat_client: Optional[ChatClient],
        contact_email: str,
        top_k: int = 5,
        temperature: float = 0.7,
        max_tokens: int = 500,
        logger: logging.Logger | None = None,
    ) -> None:
        if top_k < 1:
            raise ValueError(f"top_k must be positive, got {top_k}")
        self.context_store = context_store
        self.fallback_selector = fallback_selector
        self.prompt_builder = prompt_builder
        self.chat_client = chat_client
        self.contact_email = contact_email
        self.top_k = top_k
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.logger = logger or get_class_logger(self.__class__)

        self.logger.info(
            "PortfolioChatService initialised (vector_index=%s chat_client=%s)",
            context_store.available,
            type(chat_client).__name__ if chat_client is not None else None,
        )

    @staticmethod
    def is_credential_failure(exc: BaseException) -> bool:
        if isinstance(exc, openai.AuthenticationError):
            return True
        if getattr(exc, "status_code", None) == 401:
            return True
        return _CREDENTIAL_PATTERN.search(str(exc)) is not None

    def retrieve_context(self, query: str, top_k: Optional[int] = None) -> Tuple[List[str], str]:
        """Vector contexts when there are any, otherwise fallback contexts. Never both."""
        result = self.context_store.retrieve(query, top_k=self.top_k if top_k is None else top_k)
        if not result.is_empty:
            return result.contexts, SOURCE_VECTOR

        if isinstance(result.error, IndexUnavailable):
            self.logger.info("Vector index not configured; using fallback context")
        elif isinstance(result.error, EmbeddingError):
            self.logger.warning("Query embedding failed (%s); using fallback context", result.error)
        elif result.error is not None:
            self.logger.warning("Vector search failed (%s); using fallback context", result.error)
        else:
            self.logger.info("Vector retrieval returned no matches; using fallback context")

        contexts = self.fallback_selector.select(query)
        return contexts, (SOURCE_FALLBACK if contexts else SOURCE_NONE)

    def _generate(self, prompt: str) -> str:
        """One completion call; credential rejections raise CredentialInvalid, the rest GenerationError."""
        try:
            return self.chat_client.complete(
                self.prompt_builder.system_message,
                prompt,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            if self.is_credential_failure(e):
                raise CredentialInvalid(str(e)) from e
            raise GenerationError(f"Failed to generate an answer: {e}") from e

    def chat(
        self,
        *,
        user_query: str,
        history: Optional[Sequence[HistoryItem]] = None,
        top_k: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
            Returns:
            {
                "answer": str,
                "context_source": "vector" | "fallback" | "none",
                "contexts": [str, ...],
            }
        """
        q = (user_query or "").strip()
        if not q:
            raise ValueError("user_query must not be empty")
        if top_k is not None and top_k < 1:
            raise ValueError(f"top_k must be positive, got {top_k}")

        turns = _to_turns(history)

        if self.chat_client is None:
            self.logger.warning("chat: no language-model credential configured; returning setup message")
            return {
                "answer": self.not_configured_message.format(email=self.contact_email),
                "context_source": SOURCE_NONE,
                "contexts": [],
            }

        self.logger.info("chat: query='%s' history_turns=%d (start)", q[:120], len(turns))

        contexts, source = self.retrieve_context(q, top_k=top_k)
        self.logger.info("chat: context_source=%s contexts=%d", source, len(contexts))

        prompt = self.prompt_builder.build(q, contexts, turns)
        self.logger.debug("chat: prompt_chars=%d", len(prompt))

        try:
            answer = self._generate(prompt)
        except CredentialInvalid as e:
            self.logger.error("chat: language-model credential rejected: %s", e)
            return {
                "answer": self.connection_trouble_message.format(email=self.contact_email),
                "context_source": SOURCE_NONE,
                "contexts": [],
            }
        except GenerationError as e:
            self.logger.error("chat: generation failed: %s", e, exc_info=True)
            raise

        answer = answer or self.empty_completion_message
        self.logger.info("chat: answer_chars=%d (done)", len(answer))

        return {
            "answer": answer,
            "context_source": source,
            "contexts": contexts,
        }

    def answer(self, query: str, history: Optional[Sequence[HistoryItem]] = None) -> str:
        return self.chat(user_query=query, history=history)["answer"]
