"""Base interface for LLM providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class LLMResponse:
    """Unified response from any LLM provider."""

    content: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    stop_reason: str = ""
    provider: str = "unknown"


class BaseLLMProvider(ABC):
    """
    Abstract base class for LLM providers.

    All providers (Gemini, Anthropic, ...) implement this interface and
    report failures as TransientOverloadError or PermanentFailureError,
    so the retry loop never inspects provider-specific errors.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'gemini', 'anthropic')."""
        ...

    @abstractmethod
    async def generate_text(self, prompt: str, model: str) -> LLMResponse:
        """
        Generate a completion for a single text prompt.

        Args:
            prompt: Full prompt text
            model: Model identifier

        Returns:
            LLMResponse with content and metadata

        Raises:
            TransientOverloadError: The service is temporarily overloaded
            PermanentFailureError: Any other failure
        """
        ...

    async def aclose(self) -> None:
        """Release network resources held by the provider."""
        return None
