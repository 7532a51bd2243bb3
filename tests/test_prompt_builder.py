# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-15
# Description: test_prompt_builder.py
# -----------------------------------------------------------------------------
import pytest

from chat.PromptBuilder import ConversationTurn, PromptBuilder


def test_prompt_sections_in_order(content):
    builder = PromptBuilder(about=content.about)
    history = [ConversationTurn("user", "hi"), ConversationTurn("assistant", "hello!")]

    prompt = builder.build("What stack do you use?", ["ctx one", "ctx two"], history)

    preamble_at = prompt.index("You are an AI assistant that represents Sam Taylor, a Software Engineer.")
    context_at = prompt.index("CONTEXT ABOUT SAM TAYLOR:\nctx one\n\nctx two")
    history_at = prompt.index("CONVERSATION HISTORY:\nUser: hi\nAssistant: hello!")
    question_at = prompt.index("USER QUESTION: What stack do you use?")
    assert preamble_at < context_at < history_at < question_at


def test_preamble_sets_grounding_rules(content):
    preamble = PromptBuilder(about=content.about).preamble()
    assert "Answer only based on the provided context" in preamble
    assert "first-person" in preamble
    assert "concise" in preamble


def test_zero_history_turns_disables_history(content):
    builder = PromptBuilder(about=content.about, history_turns=0)
    assert builder.format_history([ConversationTurn("user", "hi")]) == ""


def test_turn_role_is_validated():
    with pytest.raises(ValueError):
        ConversationTurn(role="system", content="nope")
