"""Render system instruction, history and task payload into one text prompt.

Every function here is pure: the same inputs always produce the same
string, and missing optional inputs render as empty sections.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from health_tip_chat.config.prompts import (
    ASSISTANT_LABEL,
    HISTORY_HEADER,
    RESPONSE_CUE,
    SUMMARY_DIRECTIVE,
    TIP_DIRECTIVE,
    USER_LABEL,
)


def _field(turn: Any, name: str) -> str:
    """Read a field from a model instance or a plain mapping."""
    if isinstance(turn, Mapping):
        value = turn.get(name)
    else:
        value = getattr(turn, name, None)
    return "" if value is None else str(value)


def role_label(role: str) -> str:
    """Map a speaker to its prompt label; anything not "user" is the assistant."""
    return USER_LABEL if role == "user" else ASSISTANT_LABEL


def render_turns(turns: Iterable[Any] | None, speaker: str, text: str) -> list[str]:
    """Render turns as "<Label>: <text>" lines, in the given order."""
    return [
        f"{role_label(_field(turn, speaker))}: {_field(turn, text)}"
        for turn in (turns or [])
    ]


def build_chat_prompt(
    system_instruction: str,
    history: Iterable[Any] | None,
    user_message: str,
) -> str:
    """
    Build the prompt for a chat reply.

    Args:
        system_instruction: Fixed instruction placed first
        history: Earlier turns with ``role`` and ``content``, oldest first
        user_message: The message to answer

    Returns:
        Prompt ending with a cue for the assistant's reply
    """
    lines = [system_instruction.strip(), HISTORY_HEADER]
    lines.extend(render_turns(history, "role", "content"))
    lines.append(f"{USER_LABEL}: {user_message}")
    lines.append(RESPONSE_CUE)
    return "\n".join(lines)


def build_summary_prompt(
    system_instruction: str,
    conversation: Iterable[Any] | None,
) -> str:
    """Build the prompt asking for a summary of turns with ``sender`` and ``text``."""
    lines = [system_instruction.strip(), SUMMARY_DIRECTIVE]
    lines.extend(render_turns(conversation, "sender", "text"))
    return "\n".join(lines)


def build_tip_prompt(system_instruction: str) -> str:
    """Build the prompt asking for one short health tip."""
    return "\n".join([system_instruction.strip(), TIP_DIRECTIVE])
