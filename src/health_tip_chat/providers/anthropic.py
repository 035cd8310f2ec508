"""Anthropic direct API provider."""

from anthropic import AsyncAnthropic

from health_tip_chat.core.resilience import wrap_anthropic_errors
from health_tip_chat.providers.base import BaseLLMProvider, LLMResponse
from health_tip_chat.utils.logging import get_logger


logger = get_logger(__name__)


class AnthropicProvider(BaseLLMProvider):
    """
    Direct Anthropic API provider.

    SDK-level retries are disabled; the model client owns the retry policy.
    """

    def __init__(self, api_key: str, max_tokens: int = 1024, timeout_seconds: float = 60.0):
        """
        Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key
            max_tokens: Maximum output tokens per completion
            timeout_seconds: Per-HTTP-call timeout
        """
        self._client = AsyncAnthropic(
            api_key=api_key,
            max_retries=0,
            timeout=timeout_seconds,
        )
        self._max_tokens = max_tokens

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @wrap_anthropic_errors
    async def generate_text(self, prompt: str, model: str) -> LLMResponse:
        logger.debug("Calling Anthropic API", model=model, prompt_length=len(prompt))

        response = await self._client.messages.create(
            model=model,
            max_tokens=self._max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )

        content = "".join(
            block.text for block in response.content if block.type == "text"
        )

        logger.debug(
            "Anthropic response received",
            model=model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            stop_reason=response.stop_reason,
        )

        return LLMResponse(
            content=content,
            model=model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            stop_reason=response.stop_reason or "",
            provider=self.provider_name,
        )

    async def aclose(self) -> None:
        await self._client.close()
