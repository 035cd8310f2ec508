"""FastAPI routes for the health chat API."""

from fastapi import APIRouter

from health_tip_chat.api.dependencies import ChatServiceDep
from health_tip_chat.api.models import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HealthResponse,
    SummarizeRequest,
    SummarizeResponse,
    TipResponse,
)
from health_tip_chat.utils.logging import get_logger


logger = get_logger(__name__)
router = APIRouter()

ENDPOINTS = [
    "GET /",
    "GET /api/health",
    "POST /api/chat",
    "POST /api/summarize",
    "GET /api/tip",
    "POST /api/tip",
]

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request payload"},
    500: {"model": ErrorResponse, "description": "Model call failed"},
}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness check."""
    return HealthResponse(status="ok", message="Server is running")


@router.post("/chat", response_model=ChatResponse, responses=ERROR_RESPONSES)
async def chat(chat_request: ChatRequest, service: ChatServiceDep) -> ChatResponse:
    """
    Answer a health question.

    The reply takes the earlier turns of ``history`` into account.
    """
    text = await service.chat(chat_request.message, chat_request.history)
    return ChatResponse(response=text)


@router.post("/summarize", response_model=SummarizeResponse, responses=ERROR_RESPONSES)
async def summarize(
    summarize_request: SummarizeRequest, service: ChatServiceDep
) -> SummarizeResponse:
    """Summarize a conversation."""
    summary = await service.summarize(summarize_request.conversation)
    return SummarizeResponse(summary=summary)


@router.api_route(
    "/tip",
    methods=["GET", "POST"],
    response_model=TipResponse,
    responses={500: ERROR_RESPONSES[500]},
)
async def tip(service: ChatServiceDep) -> TipResponse:
    """Daily health tip. Any request body is ignored."""
    return TipResponse(tip=await service.tip())
