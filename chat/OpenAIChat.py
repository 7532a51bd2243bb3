# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: OpenAIChat
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from openai import OpenAI

from errors.PortfolioErrors import CredentialMissing
from utility.logging_utils import get_class_logger

Message = Dict[str, str]  # {"role": "system"|"user"|"assistant", "content": "..."}


@dataclass
class OpenAIChat:
    """
        OpenAI chat-completions wrapper.

        Expected Config fields:
          cfg.openai_api_key: str
          cfg.openai_base_url: str | None (optional)
          cfg.openai_org: str | None (optional)
    """

    cfg: Any
    model: str = "gpt-4o-mini"
    client: Optional[Any] = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        if self.client is None:
            if not getattr(self.cfg, "openai_api_key", None):
                raise CredentialMissing("Config is missing openai_api_key for OpenAI chat")

            self.client = OpenAI(
                api_key=self.cfg.openai_api_key,
                base_url=getattr(self.cfg, "openai_base_url", None) or None,
                organization=getattr(self.cfg, "openai_org", None) or None,
            )

        self.logger.info("OpenAIChat initialised (model=%s)", self.model)

    def chat(
            self,
            messages: List[Message],
            temperature: float = 0.7,
            max_tokens: int = 500,
    ) -> Any:
        if not messages:
            raise ValueError("messages must be non-empty.")

        self.logger.debug(
            "Chat request: model=%s temp=%s max_tokens=%s messages=%d",
            self.model, temperature, max_tokens, len(messages)
        )

        resp = self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )

        self.logger.debug("Token usage: %r", getattr(resp, "usage", None))
        return resp

    def complete(
            self,
            system_message: str,
            user_message: str,
            temperature: float = 0.7,
            max_tokens: int = 500,
    ) -> str:
        """System + user message in, completion text out (empty string if the model returned none)."""
        messages: List[Message] = [
            {"role": "system", "content": system_message},
            {"role": "user", "content": user_message},
        ]
        resp = self.chat(messages, temperature=temperature, max_tokens=max_tokens)

        try:
            content = resp.choices[0].message.content or ""
        except (AttributeError, IndexError) as e:
            self.logger.error("Unexpected chat response format: %s", e, exc_info=True)
            raise RuntimeError(f"Unexpected chat response format: {e}") from e

        self.logger.info("Chat answer generated (model=%s, chars=%d)", getattr(resp, "model", None), len(content))
        return content

    def healthcheck(self) -> bool:
        try:
            _ = self.complete("You are a health check.", "ping", temperature=0.0, max_tokens=5)
            return True
        except Exception as e:
            self.logger.warning("Chat healthcheck failed: %s", e)
            return False
