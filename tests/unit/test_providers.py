"""Tests for provider adapters and selection."""

import json
from types import SimpleNamespace

import httpx
import pytest

from health_tip_chat.config.settings import Settings
from health_tip_chat.core.exceptions import (
    ConfigurationError,
    PermanentFailureError,
    TransientOverloadError,
)
from health_tip_chat.providers import (
    AnthropicProvider,
    DisabledProvider,
    GeminiProvider,
    create_provider,
)


BASE_URL = "https://gemini.test/v1beta"


def gemini_with(handler) -> GeminiProvider:
    return GeminiProvider(
        api_key="secret-key",
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
    )


def gemini_error(status: int, message: str) -> httpx.Response:
    return httpx.Response(
        status, json={"error": {"code": status, "message": message, "status": "X"}}
    )


class TestGeminiProvider:
    """Tests for GeminiProvider."""

    @pytest.mark.asyncio
    async def test_generate_text(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "candidates": [
                        {
                            "content": {"parts": [{"text": "Drink "}, {"text": "water."}]},
                            "finishReason": "STOP",
                        }
                    ],
                    "usageMetadata": {"promptTokenCount": 12, "candidatesTokenCount": 3},
                },
            )

        provider = gemini_with(handler)
        response = await provider.generate_text("Any tip?", model="gemini-2.0-flash")
        await provider.aclose()

        assert response.content == "Drink water."
        assert response.input_tokens == 12
        assert response.output_tokens == 3
        assert response.stop_reason == "STOP"
        assert response.provider == "gemini"
        assert seen["url"] == f"{BASE_URL}/models/gemini-2.0-flash:generateContent"
        assert seen["key"] == "secret-key"
        assert "secret-key" not in seen["url"]
        assert seen["body"]["contents"][0]["parts"][0]["text"] == "Any tip?"

    @pytest.mark.asyncio
    async def test_503_is_transient_overload(self):
        provider = gemini_with(lambda request: gemini_error(503, "The model is overloaded."))

        with pytest.raises(TransientOverloadError) as exc_info:
            await provider.generate_text("hi", model="m")
        assert exc_info.value.status_code == 503
        assert "The model is overloaded." in exc_info.value.message

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 403, 429, 500])
    async def test_other_statuses_are_permanent(self, status: int):
        provider = gemini_with(lambda request: gemini_error(status, "nope"))

        with pytest.raises(PermanentFailureError) as exc_info:
            await provider.generate_text("hi", model="m")
        assert exc_info.value.status_code == status

    @pytest.mark.asyncio
    async def test_connection_error_is_permanent(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(PermanentFailureError):
            await gemini_with(handler).generate_text("hi", model="m")

    @pytest.mark.asyncio
    async def test_blocked_prompt_is_permanent(self):
        provider = gemini_with(
            lambda request: httpx.Response(
                200, json={"promptFeedback": {"blockReason": "SAFETY"}}
            )
        )

        with pytest.raises(PermanentFailureError) as exc_info:
            await provider.generate_text("hi", model="m")
        assert "SAFETY" in exc_info.value.message


class RecordingMessages:
    """Stand-in for ``AsyncAnthropic.messages`` returning a canned message."""

    def __init__(self, response):
        self.response = response
        self.kwargs: list[dict] = []

    async def create(self, **kwargs):
        self.kwargs.append(kwargs)
        return self.response


class TestAnthropicProvider:
    """Tests for AnthropicProvider."""

    @pytest.mark.asyncio
    async def test_generate_text(self):
        messages = RecordingMessages(
            SimpleNamespace(
                content=[
                    SimpleNamespace(type="text", text="Drink "),
                    SimpleNamespace(type="tool_use", name="lookup"),
                    SimpleNamespace(type="text", text="water."),
                ],
                usage=SimpleNamespace(input_tokens=12, output_tokens=4),
                stop_reason="end_turn",
            )
        )
        provider = AnthropicProvider(api_key="secret-key", max_tokens=256)
        provider._client = SimpleNamespace(messages=messages)

        response = await provider.generate_text("hi", model="claude-test")

        assert response.content == "Drink water."
        assert response.model == "claude-test"
        assert response.input_tokens == 12
        assert response.output_tokens == 4
        assert response.stop_reason == "end_turn"
        assert response.provider == "anthropic"
        assert messages.kwargs == [
            {
                "model": "claude-test",
                "max_tokens": 256,
                "messages": [{"role": "user", "content": "hi"}],
            }
        ]

    @pytest.mark.asyncio
    async def test_missing_stop_reason(self):
        messages = RecordingMessages(
            SimpleNamespace(
                content=[SimpleNamespace(type="text", text="Sleep well.")],
                usage=SimpleNamespace(input_tokens=1, output_tokens=1),
                stop_reason=None,
            )
        )
        provider = AnthropicProvider(api_key="secret-key")
        provider._client = SimpleNamespace(messages=messages)

        response = await provider.generate_text("hi", model="claude-test")

        assert response.content == "Sleep well."
        assert response.stop_reason == ""


class TestCreateProvider:
    """Tests for provider selection."""

    def test_gemini_with_key(self):
        settings = Settings(_env_file=None, llm_provider="gemini", gemini_api_key="k")
        assert isinstance(create_provider(settings), GeminiProvider)

    def test_anthropic_with_key(self):
        settings = Settings(_env_file=None, llm_provider="anthropic", anthropic_api_key="k")
        assert isinstance(create_provider(settings), AnthropicProvider)
        assert settings.model_id == settings.anthropic_model

    def test_missing_key_is_fatal_in_production(self):
        settings = Settings(_env_file=None, gemini_api_key="", deployment_mode="production")
        with pytest.raises(ConfigurationError):
            create_provider(settings)

    @pytest.mark.asyncio
    async def test_missing_key_degrades_in_development(self):
        settings = Settings(_env_file=None, gemini_api_key="", deployment_mode="development")
        provider = create_provider(settings)

        assert isinstance(provider, DisabledProvider)
        with pytest.raises(PermanentFailureError):
            await provider.generate_text("hi", model="m")
