"""API request/response models."""

from pydantic import BaseModel, Field

from health_tip_chat.core.models import ConversationTurn, SummaryTurn


class ChatRequest(BaseModel):
    """Request model for chat endpoint."""

    # Optional here so a missing message is reported by the handler as a 400
    message: str | None = Field(default=None, description="User message")
    history: list[ConversationTurn] | None = Field(
        default=None, description="Earlier turns, oldest first"
    )


class ChatResponse(BaseModel):
    """Response model for chat endpoint."""

    response: str


class SummarizeRequest(BaseModel):
    """Request model for summarize endpoint."""

    conversation: list[SummaryTurn] | None = Field(
        default=None, description="Conversation to summarize, oldest first"
    )


class SummarizeResponse(BaseModel):
    """Response model for summarize endpoint."""

    summary: str


class TipResponse(BaseModel):
    """Response model for tip endpoint."""

    tip: str


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    message: str


class ServiceInfoResponse(BaseModel):
    """Response model for the root endpoint."""

    name: str
    version: str
    endpoints: list[str]


class ErrorResponse(BaseModel):
    """Error response body."""

    error: str
    kind: str | None = None
