"""Provider used when no model credential is configured (development mode)."""

from health_tip_chat.core.exceptions import PermanentFailureError
from health_tip_chat.providers.base import BaseLLMProvider, LLMResponse


class DisabledProvider(BaseLLMProvider):
    """Fails every call permanently so the service runs without real responses."""

    def __init__(self, reason: str = "No model API key configured"):
        self._reason = reason

    @property
    def provider_name(self) -> str:
        return "disabled"

    async def generate_text(self, prompt: str, model: str) -> LLMResponse:
        raise PermanentFailureError(self._reason)
