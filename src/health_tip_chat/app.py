"""Application class with startup/shutdown lifecycle."""

from health_tip_chat.config.settings import Settings, get_settings
from health_tip_chat.core.model_client import ModelClient
from health_tip_chat.core.resilience import RetryPolicy
from health_tip_chat.providers import BaseLLMProvider, create_provider
from health_tip_chat.services.health_chat import HealthChatService
from health_tip_chat.utils.logging import configure_logging, get_logger


logger = get_logger(__name__)


def build_retry_policy(settings: Settings) -> RetryPolicy:
    """Retry policy from settings; a zero timeout disables the overall bound."""
    return RetryPolicy(
        max_retries=settings.retry_max_attempts,
        initial_delay_ms=settings.retry_initial_delay_ms,
        max_delay_ms=settings.retry_max_delay_ms,
        timeout_seconds=settings.request_timeout_seconds or None,
    )


class Application:
    """
    Owns the objects built at startup.

    Handles:
    - Provider selection and the missing-credential policy
    - Wiring provider, model client and chat service
    - Closing provider connections on shutdown
    """

    def __init__(self, settings: Settings | None = None):
        """Initialize application."""
        self.settings = settings or get_settings()
        self.provider: BaseLLMProvider | None = None
        self.model_client: ModelClient | None = None
        self.chat_service: HealthChatService | None = None

    async def startup(self) -> None:
        """
        Initialize resources on startup.

        Raises:
            ConfigurationError: If the model credential is missing in production mode
        """
        settings = self.settings
        configure_logging(settings.log_level, json_logs=settings.log_json)

        logger.info(
            "Starting application...",
            provider=settings.llm_provider,
            model=settings.model_id,
            deployment_mode=settings.deployment_mode,
        )

        self.provider = create_provider(settings)
        self.model_client = ModelClient(
            provider=self.provider,
            model_id=settings.model_id,
            policy=build_retry_policy(settings),
        )
        self.chat_service = HealthChatService.from_settings(self.model_client, settings)

        logger.info(
            "Application started",
            failure_policy=settings.failure_policy,
            tip_source=settings.tip_source,
        )

    async def shutdown(self) -> None:
        """Close provider connections."""
        logger.info("Shutdown initiated...")
        if self.provider:
            await self.provider.aclose()
        logger.info("Shutdown complete")
