"""Domain exceptions for the health tip chat service."""

from enum import Enum


class HealthChatError(Exception):
    """Base exception for all health tip chat errors."""

    def __init__(self, message: str, recoverable: bool = True):
        super().__init__(message)
        self.message = message
        self.recoverable = recoverable


class InvalidInputError(HealthChatError):
    """Request payload is missing or has an empty required field."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, recoverable=False)
        self.field = field


class TransientOverloadError(HealthChatError):
    """Model service is temporarily saturated; the same call may succeed later."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, recoverable=True)
        self.status_code = status_code


class PermanentFailureError(HealthChatError):
    """Any other model service failure, including bad or missing credentials."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, recoverable=False)
        self.status_code = status_code


class ConfigurationError(HealthChatError):
    """Startup configuration is unusable."""

    def __init__(self, message: str):
        super().__init__(message, recoverable=False)


class FailureKind(str, Enum):
    """Why a model call gave up."""

    EXHAUSTED_RETRIES = "exhausted_retries"
    NON_RETRYABLE = "non_retryable"
    TIMEOUT = "timeout"


class ModelCallError(HealthChatError):
    """A model call failed for good; raised by handlers on the error policy."""

    def __init__(self, message: str, kind: FailureKind, attempts: int = 0):
        super().__init__(message, recoverable=kind != FailureKind.NON_RETRYABLE)
        self.kind = kind
        self.attempts = attempts
