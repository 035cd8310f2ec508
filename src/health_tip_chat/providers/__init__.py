"""LLM provider implementations.

Supports multiple LLM providers with a unified interface:
- Gemini: Google Generative Language REST API (default)
- Anthropic: Direct API access to Claude models
- Disabled: Stand-in when no credential is configured in development mode

Usage:
    from health_tip_chat.providers import create_provider

    provider = create_provider(settings)
"""

from health_tip_chat.config.settings import Settings
from health_tip_chat.core.exceptions import ConfigurationError
from health_tip_chat.providers.anthropic import AnthropicProvider
from health_tip_chat.providers.base import BaseLLMProvider, LLMResponse
from health_tip_chat.providers.disabled import DisabledProvider
from health_tip_chat.providers.gemini import GeminiProvider
from health_tip_chat.utils.logging import get_logger


logger = get_logger(__name__)


def create_provider(settings: Settings) -> BaseLLMProvider:
    """
    Factory function to create the LLM provider selected in settings.

    Args:
        settings: Application settings

    Returns:
        Configured LLM provider instance

    Raises:
        ConfigurationError: If the credential is missing in production mode
        ValueError: If unknown provider specified
    """
    provider_name = settings.llm_provider

    if not settings.api_key:
        message = f"{provider_name} API key is not configured"
        if settings.deployment_mode == "production":
            raise ConfigurationError(message)
        logger.warning(
            "Model calls disabled",
            reason=message,
            deployment_mode=settings.deployment_mode,
        )
        return DisabledProvider(reason=message)

    if provider_name == "gemini":
        return GeminiProvider(
            api_key=settings.gemini_api_key,
            base_url=settings.gemini_base_url,
        )

    elif provider_name == "anthropic":
        return AnthropicProvider(
            api_key=settings.anthropic_api_key,
            max_tokens=settings.anthropic_max_tokens,
        )

    raise ValueError(
        f"Unknown LLM provider: {provider_name}. "
        f"Supported providers: gemini, anthropic"
    )


__all__ = [
    "BaseLLMProvider",
    "LLMResponse",
    "AnthropicProvider",
    "DisabledProvider",
    "GeminiProvider",
    "create_provider",
]
