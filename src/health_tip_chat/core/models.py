"""Domain models shared by the prompt builder, model client and handlers."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from health_tip_chat.core.exceptions import FailureKind, ModelCallError


class ConversationTurn(BaseModel):
    """One chat history entry, oldest first."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"] = Field(description="Who wrote the turn")
    content: str = Field(description="Turn text")


class SummaryTurn(BaseModel):
    """One message of a conversation to summarize, as the UI stores it."""

    model_config = ConfigDict(frozen=True)

    sender: Literal["user", "ai"] = Field(description="Who wrote the message")
    text: str = Field(description="Message text")


class ModelCallOutcome(BaseModel):
    """
    Result of one logical model call, after retries.

    Either a success carrying the generated text, or a failure carrying
    the failure kind and a message safe to show to callers.
    """

    success: bool = Field(True, description="Whether the call produced text")
    text: str | None = Field(None, description="Generated text on success")
    kind: FailureKind | None = Field(None, description="Failure kind on failure")
    error: str | None = Field(None, description="Error message on failure")
    attempts: int = Field(0, description="Number of model calls made")

    @classmethod
    def success_result(cls, text: str, attempts: int = 1) -> "ModelCallOutcome":
        """Create successful outcome."""
        return cls(success=True, text=text, attempts=attempts)

    @classmethod
    def failure_result(
        cls, kind: FailureKind, error: str, attempts: int = 0
    ) -> "ModelCallOutcome":
        """Create failed outcome."""
        return cls(success=False, kind=kind, error=error, attempts=attempts)

    def unwrap(self) -> str:
        """Return the generated text or raise ModelCallError."""
        if self.success:
            return self.text or ""
        raise ModelCallError(
            self.error or "Model call failed",
            kind=self.kind or FailureKind.NON_RETRYABLE,
            attempts=self.attempts,
        )
