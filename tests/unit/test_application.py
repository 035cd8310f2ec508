"""Tests for application startup."""

import pytest

from health_tip_chat.app import Application, build_retry_policy
from health_tip_chat.config.settings import Settings
from health_tip_chat.core.exceptions import ConfigurationError
from health_tip_chat.providers import GeminiProvider


class TestApplication:
    """Tests for Application startup and shutdown."""

    @pytest.mark.asyncio
    async def test_missing_key_aborts_production_startup(self):
        application = Application(
            Settings(_env_file=None, gemini_api_key="", deployment_mode="production")
        )
        with pytest.raises(ConfigurationError):
            await application.startup()
        assert application.chat_service is None

    @pytest.mark.asyncio
    async def test_startup_wires_components(self, settings: Settings):
        application = Application(settings)
        await application.startup()

        assert isinstance(application.provider, GeminiProvider)
        assert application.model_client.provider_name == "gemini"
        assert application.chat_service.failure_policy == "error"
        await application.shutdown()

    def test_retry_policy_from_settings(self):
        settings = Settings(
            _env_file=None,
            retry_max_attempts=5,
            retry_initial_delay_ms=200,
            retry_max_delay_ms=4000,
            request_timeout_seconds=0,
        )
        policy = build_retry_policy(settings)

        assert policy.max_retries == 5
        assert policy.initial_delay_ms == 200
        assert policy.max_delay_ms == 4000
        assert policy.timeout_seconds is None
