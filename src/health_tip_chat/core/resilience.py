"""Resilience patterns for upstream model calls.

This module provides the building blocks the model client composes:
- Retry policy with capped exponential backoff for transient overload
- Classification of provider failures into tagged error types
- Timeouts to bound a whole call, backoff waits included
- Fallbacks for graceful degradation

Usage:
    from health_tip_chat.core.resilience import (
        RetryPolicy,
        wrap_httpx_errors,
        run_with_timeout,
        with_fallback,
    )

    @wrap_httpx_errors
    async def call_model_api(...):
        ...
"""

import asyncio
from dataclasses import dataclass
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

import anthropic
import httpx
from hyx.fallback.api import fallback
from hyx.timeout.exceptions import MaxDurationExceeded

from health_tip_chat.core.exceptions import PermanentFailureError, TransientOverloadError

# Alias for clarity
MaxTimeoutExceeded = MaxDurationExceeded

__all__ = [
    "MaxTimeoutExceeded",
    "OVERLOAD_STATUS_CODES",
    "RetryPolicy",
    "classify_http_error",
    "wrap_httpx_errors",
    "wrap_anthropic_errors",
    "run_with_timeout",
    "with_fallback",
]

# 503: service unavailable (Gemini "model is overloaded"), 529: Anthropic overloaded
OVERLOAD_STATUS_CODES = frozenset({503, 529})


# =============================================================================
# CONFIGURATION
# =============================================================================


@dataclass(frozen=True)
class RetryPolicy:
    """Retry and timeout settings for one logical model call."""

    max_retries: int = 3
    initial_delay_ms: int = 1000
    max_delay_ms: int = 30000
    timeout_seconds: float | None = 60.0

    def __post_init__(self) -> None:
        validate_retry_args(self.max_retries, self.initial_delay_ms)
        if self.max_delay_ms < self.initial_delay_ms:
            raise ValueError("max_delay_ms must be >= initial_delay_ms")


def validate_retry_args(max_retries: int, initial_delay_ms: int) -> None:
    """Reject retry budgets the tenacity loop cannot honor."""
    if max_retries < 1:
        raise ValueError("max_retries must be >= 1")
    if initial_delay_ms <= 0:
        raise ValueError("initial_delay_ms must be > 0")


# =============================================================================
# ERROR CLASSIFICATION
# =============================================================================


def classify_http_error(status_code: int, detail: str = "") -> Exception:
    """
    Classify an upstream HTTP status into a tagged error.

    Args:
        status_code: HTTP status code returned by the model service
        detail: Error message extracted from the response body

    Returns:
        TransientOverloadError for overload statuses,
        PermanentFailureError for everything else
    """
    suffix = f": {detail}" if detail else ""
    if status_code in OVERLOAD_STATUS_CODES:
        return TransientOverloadError(
            f"Model service overloaded (HTTP {status_code}){suffix}",
            status_code=status_code,
        )
    return PermanentFailureError(
        f"Model service error (HTTP {status_code}){suffix}",
        status_code=status_code,
    )


def _response_detail(response: httpx.Response) -> str:
    """Pull the error message out of a JSON error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        return str(error.get("message", ""))
    return ""


F = TypeVar("F", bound=Callable[..., Any])


def wrap_httpx_errors(func: F) -> F:
    """
    Decorator to convert httpx exceptions to tagged model errors.

    Only overload statuses become TransientOverloadError; network errors
    and every other status are permanent for the retry loop.
    """
    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except httpx.HTTPStatusError as e:
            raise classify_http_error(
                e.response.status_code, _response_detail(e.response)
            ) from e
        except httpx.TimeoutException as e:
            raise PermanentFailureError(f"Request timeout: {e}") from e
        except httpx.HTTPError as e:
            raise PermanentFailureError(f"Connection error: {e}") from e

    return wrapper  # type: ignore


def wrap_anthropic_errors(func: F) -> F:
    """
    Decorator to convert Anthropic API exceptions to tagged model errors.
    """
    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except anthropic.APIStatusError as e:
            raise classify_http_error(e.status_code, e.message) from e
        except anthropic.APIConnectionError as e:
            raise PermanentFailureError(f"Anthropic connection error: {e}") from e
        except anthropic.AnthropicError as e:
            raise PermanentFailureError(f"Anthropic error: {e}") from e

    return wrapper  # type: ignore


# =============================================================================
# GENERIC PATTERNS
# =============================================================================


T = TypeVar("T")


async def run_with_timeout(operation: Awaitable[T], timeout_seconds: float | None) -> T:
    """
    Await an operation, bounded by timeout_seconds when set.

    Expiry cancels the operation, including any backoff wait in progress.

    Raises:
        MaxTimeoutExceeded: If the operation did not finish in time
    """
    if not timeout_seconds:
        return await operation
    try:
        return await asyncio.wait_for(operation, timeout=timeout_seconds)
    except asyncio.TimeoutError:
        raise MaxTimeoutExceeded(f"Operation timed out after {timeout_seconds}s")


def with_fallback(fallback_value: Any, on: tuple = (Exception,)):
    """
    Create a fallback decorator that returns a default value on failure.

    Args:
        fallback_value: Value to return on failure
        on: Exception types to catch

    Usage:
        @with_fallback(fallback_value="Service unavailable", on=(ModelCallError,))
        async def answer():
            ...
    """
    async def fallback_handler(*args: Any, **kwargs: Any) -> Any:
        return fallback_value

    return fallback(handler=fallback_handler, on=on)
