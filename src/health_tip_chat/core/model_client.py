"""Model client: one logical text generation with retry and backoff.

The client wraps a single provider call in a tenacity retry loop.
Transient overload is retried with exponential backoff; everything else
ends the call. The result is always a ModelCallOutcome, never an
exception, so handlers decide how a failure is presented.
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from health_tip_chat.core.exceptions import (
    FailureKind,
    PermanentFailureError,
    TransientOverloadError,
)
from health_tip_chat.core.models import ModelCallOutcome
from health_tip_chat.core.resilience import (
    MaxTimeoutExceeded,
    RetryPolicy,
    run_with_timeout,
    validate_retry_args,
)
from health_tip_chat.providers.base import BaseLLMProvider
from health_tip_chat.utils.logging import get_logger


logger = get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


@dataclass
class RetryState:
    """Calls made so far by one generate() call; never shared between calls."""

    attempt: int = 0


class ModelClient:
    """
    Async model client with retry on transient overload.

    Example:
        client = ModelClient(GeminiProvider(api_key="..."), "gemini-2.0-flash")
        outcome = await client.generate("Hello")
        if outcome.success:
            print(outcome.text)
    """

    def __init__(
        self,
        provider: BaseLLMProvider,
        model_id: str,
        policy: RetryPolicy | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """
        Initialize model client.

        Args:
            provider: Provider performing the actual call
            model_id: Model identifier passed to the provider
            policy: Retry and timeout policy
            sleep: Coroutine used for backoff waits, in seconds
        """
        self._provider = provider
        self._model_id = model_id
        self._policy = policy or RetryPolicy()
        self._sleep = sleep

    @property
    def provider_name(self) -> str:
        """Get the name of the current provider."""
        return self._provider.provider_name

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def generate(
        self,
        prompt: str,
        max_retries: int | None = None,
        initial_delay_ms: int | None = None,
    ) -> ModelCallOutcome:
        """
        Generate text for a prompt, retrying transient overload.

        Args:
            prompt: Full prompt text
            max_retries: Total attempt budget, >= 1 (policy default)
            initial_delay_ms: First backoff delay, > 0 (policy default)

        Returns:
            ModelCallOutcome with the text or the failure kind
        """
        if max_retries is None:
            max_retries = self._policy.max_retries
        if initial_delay_ms is None:
            initial_delay_ms = self._policy.initial_delay_ms
        validate_retry_args(max_retries, initial_delay_ms)

        state = RetryState()
        try:
            return await run_with_timeout(
                self._generate_with_retry(prompt, max_retries, initial_delay_ms, state),
                self._policy.timeout_seconds,
            )
        except MaxTimeoutExceeded as e:
            logger.error(
                "Model call timed out",
                attempts=state.attempt,
                timeout_seconds=self._policy.timeout_seconds,
            )
            return ModelCallOutcome.failure_result(
                FailureKind.TIMEOUT, str(e), attempts=state.attempt
            )

    def _retrying(self, max_retries: int, initial_delay_ms: int) -> AsyncRetrying:
        max_delay_ms = max(self._policy.max_delay_ms, initial_delay_ms)

        def log_backoff(retry_state: RetryCallState) -> None:
            logger.warning(
                "Model overloaded, retrying",
                attempt=retry_state.attempt_number,
                max_retries=max_retries,
                delay_ms=round(retry_state.next_action.sleep * 1000),
                error=str(retry_state.outcome.exception()),
            )

        return AsyncRetrying(
            stop=stop_after_attempt(max_retries),
            wait=wait_exponential(
                multiplier=initial_delay_ms / 1000,
                exp_base=2,
                max=max_delay_ms / 1000,
            ),
            retry=retry_if_exception_type(TransientOverloadError),
            sleep=self._sleep,
            before_sleep=log_backoff,
            reraise=True,
        )

    async def _generate_with_retry(
        self,
        prompt: str,
        max_retries: int,
        initial_delay_ms: int,
        state: RetryState,
    ) -> ModelCallOutcome:
        try:
            async for attempt in self._retrying(max_retries, initial_delay_ms):
                with attempt:
                    state.attempt = attempt.retry_state.attempt_number
                    response = await self._provider.generate_text(prompt, model=self._model_id)

        except TransientOverloadError as e:
            logger.error(
                "Model overloaded, retries exhausted",
                attempts=state.attempt,
                error=e.message,
            )
            return ModelCallOutcome.failure_result(
                FailureKind.EXHAUSTED_RETRIES, e.message, attempts=state.attempt
            )

        except PermanentFailureError as e:
            logger.error(
                "Model call failed",
                attempts=state.attempt,
                status_code=e.status_code,
                error=e.message,
            )
            return ModelCallOutcome.failure_result(
                FailureKind.NON_RETRYABLE, e.message, attempts=state.attempt
            )

        except Exception as e:
            logger.error("Unexpected model call error", error=str(e), exc_info=True)
            return ModelCallOutcome.failure_result(
                FailureKind.NON_RETRYABLE,
                f"Unexpected model error: {type(e).__name__}",
                attempts=state.attempt,
            )

        return ModelCallOutcome.success_result(response.content, attempts=state.attempt)
