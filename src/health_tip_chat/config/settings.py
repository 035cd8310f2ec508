"""Application settings via environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings

from health_tip_chat.config.prompts import DEFAULT_FALLBACK_MESSAGE, HEALTH_SYSTEM_INSTRUCTION


class Settings(BaseSettings):
    """Application settings via environment variables."""

    # LLM Provider Selection
    # Options: "gemini" (Google Generative Language API) or "anthropic"
    llm_provider: Literal["gemini", "anthropic"] = "gemini"

    # Google Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    # Anthropic Direct API
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-3-5-haiku-latest"
    anthropic_max_tokens: int = 1024

    # "production": a missing model credential aborts startup
    # "development": the service starts and every model call fails
    deployment_mode: Literal["production", "development"] = "production"

    # Prompting
    system_instruction: str = HEALTH_SYSTEM_INSTRUCTION
    max_history_turns: int | None = None  # None keeps the whole history

    # Retry policy for model calls
    retry_max_attempts: int = 3
    retry_initial_delay_ms: int = 1000
    retry_max_delay_ms: int = 30000
    request_timeout_seconds: float = 60.0  # 0 disables the overall timeout

    # What the handlers return when the model call fails
    # "error": HTTP 500, "fallback": fallback_message with HTTP 200
    failure_policy: Literal["error", "fallback"] = "error"
    fallback_message: str = DEFAULT_FALLBACK_MESSAGE

    # Daily tip
    tip_source: Literal["list", "model"] = "list"
    tip_timezone: str = "UTC"

    # CORS
    allowed_origins: list[str] = ["http://localhost:5173"]

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3001

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def model_id(self) -> str:
        """Model identifier for the selected provider."""
        if self.llm_provider == "anthropic":
            return self.anthropic_model
        return self.gemini_model

    @property
    def api_key(self) -> str:
        """Credential for the selected provider."""
        if self.llm_provider == "anthropic":
            return self.anthropic_api_key
        return self.gemini_api_key


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
