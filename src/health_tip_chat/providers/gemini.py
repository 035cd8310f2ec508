"""Google Gemini provider over the Generative Language REST API."""

from typing import Any

import httpx

from health_tip_chat.core.exceptions import PermanentFailureError
from health_tip_chat.core.resilience import wrap_httpx_errors
from health_tip_chat.providers.base import BaseLLMProvider, LLMResponse
from health_tip_chat.utils.logging import get_logger


logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GeminiProvider(BaseLLMProvider):
    """
    Gemini provider calling ``models/{model}:generateContent``.

    The API key travels in the ``x-goog-api-key`` header, never in the URL,
    so it cannot leak through error messages that quote the request.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize Gemini provider.

        Args:
            api_key: Gemini API key
            base_url: API root, without trailing slash
            timeout_seconds: Per-HTTP-call timeout
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            headers={"x-goog-api-key": api_key},
            timeout=timeout_seconds,
            transport=transport,
        )

    @property
    def provider_name(self) -> str:
        return "gemini"

    @wrap_httpx_errors
    async def generate_text(self, prompt: str, model: str) -> LLMResponse:
        logger.debug("Calling Gemini API", model=model, prompt_length=len(prompt))

        response = await self._client.post(
            f"{self._base_url}/models/{model}:generateContent",
            json={"contents": [{"role": "user", "parts": [{"text": prompt}]}]},
        )
        response.raise_for_status()
        data: dict[str, Any] = response.json()

        candidates = data.get("candidates") or []
        if not candidates:
            block_reason = (data.get("promptFeedback") or {}).get("blockReason", "unknown")
            raise PermanentFailureError(f"Gemini returned no candidates (block reason: {block_reason})")

        candidate = candidates[0]
        parts = (candidate.get("content") or {}).get("parts") or []
        content = "".join(part.get("text", "") for part in parts)
        usage = data.get("usageMetadata") or {}

        logger.debug(
            "Gemini response received",
            model=model,
            input_tokens=usage.get("promptTokenCount", 0),
            output_tokens=usage.get("candidatesTokenCount", 0),
            finish_reason=candidate.get("finishReason", ""),
        )

        return LLMResponse(
            content=content,
            model=model,
            input_tokens=usage.get("promptTokenCount", 0),
            output_tokens=usage.get("candidatesTokenCount", 0),
            stop_reason=candidate.get("finishReason", ""),
            provider=self.provider_name,
        )

    async def aclose(self) -> None:
        await self._client.aclose()
