"""Pytest fixtures for testing."""

from datetime import datetime, tzinfo

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from health_tip_chat.config.settings import Settings
from health_tip_chat.core.model_client import ModelClient
from health_tip_chat.core.resilience import RetryPolicy
from health_tip_chat.main import create_app
from health_tip_chat.providers.base import BaseLLMProvider, LLMResponse
from health_tip_chat.services.health_chat import HealthChatService


class FakeProvider(BaseLLMProvider):
    """
    Scripted provider.

    Each call consumes the next script item: an exception is raised,
    a string is returned as the completion. Once the script is empty,
    ``always`` is raised if it is an exception, otherwise returned.
    """

    def __init__(self, script: list | None = None, always: object = "Drink more water."):
        self.script = list(script or [])
        self.always = always
        self.prompts: list[str] = []
        self.models: list[str] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def generate_text(self, prompt: str, model: str) -> LLMResponse:
        self.prompts.append(prompt)
        self.models.append(model)
        item = self.script.pop(0) if self.script else self.always
        if isinstance(item, BaseException):
            raise item
        return LLMResponse(content=str(item), model=model, provider=self.provider_name)


class RecordingSleep:
    """Backoff sleep that records requested delays instead of waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def fixed_clock(day: int):
    """Clock returning a fixed date in the requested timezone."""
    def clock(tz: tzinfo) -> datetime:
        return datetime(2024, 3, day, 12, 0, tzinfo=tz)
    return clock


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        _env_file=None,
        gemini_api_key="test-key",
        deployment_mode="production",
        failure_policy="error",
        tip_source="list",
        log_level="DEBUG",
    )


@pytest.fixture
def provider() -> FakeProvider:
    """Provider answering every call successfully."""
    return FakeProvider()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def model_client(provider: FakeProvider, recording_sleep: RecordingSleep) -> ModelClient:
    """Model client over the fake provider with instant backoff."""
    return ModelClient(
        provider=provider,
        model_id="test-model",
        policy=RetryPolicy(max_retries=3, initial_delay_ms=100, timeout_seconds=None),
        sleep=recording_sleep,
    )


@pytest.fixture
def chat_service(model_client: ModelClient) -> HealthChatService:
    """Chat service with the error failure policy and a fixed clock."""
    return HealthChatService(
        model_client=model_client,
        system_instruction="You are a health assistant.",
        clock=fixed_clock(15),
    )


@pytest.fixture
def app(settings: Settings, chat_service: HealthChatService) -> FastAPI:
    """Application wired to the fake-backed chat service."""
    return create_app(settings=settings, chat_service=chat_service)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """HTTP client; lifespan is not run, the injected service is used as is."""
    return TestClient(app)
