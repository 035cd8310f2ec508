"""Request handlers: chat, summarize and daily tip.

Each operation validates its input, builds a prompt, calls the model
client and maps the outcome. Validation errors are raised before any
model call. How a model failure surfaces depends on the failure policy:
"error" raises ModelCallError, "fallback" returns a fixed message.
"""

from collections.abc import Sequence
from datetime import datetime, tzinfo
from typing import Callable, Literal

from health_tip_chat.config.prompts import DAILY_TIPS, DEFAULT_FALLBACK_MESSAGE, HEALTH_SYSTEM_INSTRUCTION
from health_tip_chat.config.settings import Settings
from health_tip_chat.core.exceptions import InvalidInputError, ModelCallError
from health_tip_chat.core.model_client import ModelClient
from health_tip_chat.core.models import ConversationTurn, SummaryTurn
from health_tip_chat.core.prompt_builder import (
    build_chat_prompt,
    build_summary_prompt,
    build_tip_prompt,
)
from health_tip_chat.core.resilience import with_fallback
from health_tip_chat.services.tips import TipService, TipSource
from health_tip_chat.utils.logging import get_logger


logger = get_logger(__name__)

FailurePolicy = Literal["error", "fallback"]


class HealthChatService:
    """
    Chat, summarize and tip operations over an injected model client.

    Holds no per-request state; one instance serves all requests.
    """

    def __init__(
        self,
        model_client: ModelClient,
        system_instruction: str = HEALTH_SYSTEM_INSTRUCTION,
        failure_policy: FailurePolicy = "error",
        fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
        max_history_turns: int | None = None,
        tip_source: TipSource = "list",
        tips: Sequence[str] = DAILY_TIPS,
        tip_timezone: str = "UTC",
        clock: Callable[[tzinfo], datetime] | None = None,
    ):
        self._client = model_client
        self._system_instruction = system_instruction
        self._failure_policy = failure_policy
        self._fallback_message = fallback_message
        self._max_history_turns = max_history_turns
        self._tips = TipService(
            source=tip_source,
            tips=tips,
            timezone=tip_timezone,
            clock=clock,
            generate=self._generate_tip,
        )

    @classmethod
    def from_settings(cls, model_client: ModelClient, settings: Settings) -> "HealthChatService":
        """Build the service from application settings."""
        return cls(
            model_client=model_client,
            system_instruction=settings.system_instruction,
            failure_policy=settings.failure_policy,
            fallback_message=settings.fallback_message,
            max_history_turns=settings.max_history_turns,
            tip_source=settings.tip_source,
            tip_timezone=settings.tip_timezone,
        )

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._failure_policy

    async def chat(
        self,
        message: str | None,
        history: Sequence[ConversationTurn] | None = None,
    ) -> str:
        """
        Answer a user message in the context of earlier turns.

        Raises:
            InvalidInputError: If message is missing or blank
            ModelCallError: If the model failed and the policy is "error"
        """
        if message is None or not message.strip():
            raise InvalidInputError("Message is required", field="message")

        turns = list(history or [])
        if self._max_history_turns is not None:
            turns = turns[-self._max_history_turns:] if self._max_history_turns > 0 else []

        logger.info("Chat request", message_length=len(message), history_turns=len(turns))
        prompt = build_chat_prompt(self._system_instruction, turns, message.strip())
        return await self._complete(prompt)

    async def summarize(self, conversation: Sequence[SummaryTurn] | None) -> str:
        """
        Summarize a whole conversation.

        No truncation happens here; callers bound the conversation size.

        Raises:
            InvalidInputError: If conversation is missing or empty
            ModelCallError: If the model failed and the policy is "error"
        """
        if not conversation:
            raise InvalidInputError("No conversation to summarize", field="conversation")

        logger.info("Summarize request", turns=len(conversation))
        prompt = build_summary_prompt(self._system_instruction, conversation)
        return await self._complete(prompt)

    async def tip(self) -> str:
        """Return the daily health tip."""
        return await self._tips.get_tip()

    async def _generate_tip(self) -> str:
        return await self._complete(build_tip_prompt(self._system_instruction))

    async def _complete(self, prompt: str) -> str:
        if self._failure_policy == "fallback":
            guarded = with_fallback(self._fallback_message, on=(ModelCallError,))(
                self._complete_or_raise
            )
            return await guarded(prompt)
        return await self._complete_or_raise(prompt)

    async def _complete_or_raise(self, prompt: str) -> str:
        outcome = await self._client.generate(prompt)
        return outcome.unwrap()
