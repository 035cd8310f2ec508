"""API module."""

from .routes import router
from .errors import register_exception_handlers
from .models import ChatRequest, ChatResponse, HealthResponse, SummarizeRequest

__all__ = [
    "router",
    "register_exception_handlers",
    "ChatRequest",
    "ChatResponse",
    "HealthResponse",
    "SummarizeRequest",
]
