# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: PromptBuilder
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Literal, Sequence

from content.PortfolioContent import About

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class ConversationTurn:
    role: Role
    content: str

    def __post_init__(self) -> None:
        if self.role not in ("user", "assistant"):
            raise ValueError(f"role must be 'user' or 'assistant', got {self.role!r}")


@dataclass(frozen=True)
class PromptBuilder:
    """
    Assembles the grounding prompt: persona preamble, retrieved context,
    recent conversation history and the literal user question.
    """

    about: About
    history_turns: int = 6

    @property
    def system_message(self) -> str:
        return f"You are a helpful AI assistant representing {self.about.name}."

    def preamble(self) -> str:
        return (
            f"You are an AI assistant that represents {self.about.name}, {self.about.headline}. "
            "Your role is to help recruiters and visitors learn about their background, skills, and experience.\n"
            "\n"
            "IMPORTANT GUIDELINES:\n"
            "- Be conversational, friendly, and professional\n"
            "- Answer only based on the provided context\n"
            "- If you don't have information, politely say so and suggest they get in touch directly\n"
            "- Keep responses concise (2-3 paragraphs max) unless asked for details\n"
            f"- Use first-person perspective when discussing {self.about.name} (e.g., \"I have experience in...\")\n"
            "- Be enthusiastic about the work but remain humble"
        )

    def format_history(self, history: Sequence[ConversationTurn]) -> str:
        if not history or self.history_turns <= 0:
            return ""
        recent = list(history)[-self.history_turns:]
        return "\n".join(
            f"{'User' if turn.role == 'user' else 'Assistant'}: {turn.content}" for turn in recent
        )

    def build(self, query: str, contexts: Sequence[str], history: Sequence[ConversationTurn] = ()) -> str:
        context_text = "\n\n".join(contexts)
        history_text = self.format_history(history)
        history_block = f"CONVERSATION HISTORY:\n{history_text}\n\n" if history_text else ""

        return (
            f"{self.preamble()}\n"
            "\n"
            f"CONTEXT ABOUT {self.about.name.upper()}:\n"
            f"{context_text}\n"
            "\n"
            f"{history_block}"
            f"USER QUESTION: {query}\n"
            "\n"
            "Please provide a helpful, accurate response based on the context above:"
        )
