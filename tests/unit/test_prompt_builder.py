"""Tests for prompt construction."""

from health_tip_chat.config.prompts import RESPONSE_CUE, SUMMARY_DIRECTIVE, TIP_DIRECTIVE
from health_tip_chat.core.models import ConversationTurn, SummaryTurn
from health_tip_chat.core.prompt_builder import (
    build_chat_prompt,
    build_summary_prompt,
    build_tip_prompt,
    role_label,
)


INSTRUCTION = "You are a health assistant."


class TestChatPrompt:
    """Tests for build_chat_prompt."""

    def test_deterministic(self):
        """Same inputs give byte-identical prompts."""
        history = [ConversationTurn(role="user", content="Hi")]
        first = build_chat_prompt(INSTRUCTION, history, "How much water?")
        second = build_chat_prompt(INSTRUCTION, history, "How much water?")
        assert first == second

    def test_history_order_preserved(self):
        """History turns appear oldest first, before the new message."""
        history = [
            ConversationTurn(role="user", content="AAA"),
            ConversationTurn(role="assistant", content="BBB"),
        ]
        prompt = build_chat_prompt(INSTRUCTION, history, "CCC")
        assert prompt.index("AAA") < prompt.index("BBB") < prompt.index("CCC")

    def test_layout(self):
        """Instruction first, labeled turns, message, then the reply cue."""
        history = [
            ConversationTurn(role="user", content="I have a headache"),
            ConversationTurn(role="assistant", content="Drink water"),
        ]
        lines = build_chat_prompt(INSTRUCTION, history, "Thanks").split("\n")
        assert lines[0] == INSTRUCTION
        assert "User: I have a headache" in lines
        assert "Assistant: Drink water" in lines
        assert lines[-2] == "User: Thanks"
        assert lines[-1] == RESPONSE_CUE

    def test_empty_and_missing_history(self):
        """None and [] render the same empty history section."""
        assert build_chat_prompt(INSTRUCTION, None, "Hello") == build_chat_prompt(
            INSTRUCTION, [], "Hello"
        )

    def test_plain_mappings_accepted(self):
        """Dict turns render like model turns; unknown roles are the assistant."""
        prompt = build_chat_prompt(
            INSTRUCTION,
            [{"role": "user", "content": "one"}, {"role": "bot", "content": "two"}],
            "three",
        )
        assert "User: one" in prompt
        assert "Assistant: two" in prompt


class TestSummaryPrompt:
    """Tests for build_summary_prompt."""

    def test_turns_labeled_by_sender(self):
        conversation = [
            SummaryTurn(sender="user", text="I sleep badly"),
            SummaryTurn(sender="ai", text="Avoid screens at night"),
        ]
        prompt = build_summary_prompt(INSTRUCTION, conversation)
        lines = prompt.split("\n")
        assert lines[0] == INSTRUCTION
        assert lines[1] == SUMMARY_DIRECTIVE
        assert lines[2:] == ["User: I sleep badly", "Assistant: Avoid screens at night"]


def test_tip_prompt():
    """Tip prompt is the instruction plus the tip directive."""
    assert build_tip_prompt(INSTRUCTION) == f"{INSTRUCTION}\n{TIP_DIRECTIVE}"


def test_role_label():
    assert role_label("user") == "User"
    assert role_label("assistant") == "Assistant"
    assert role_label("ai") == "Assistant"
