"""FastAPI dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from health_tip_chat.services.health_chat import HealthChatService


async def get_chat_service(request: Request) -> HealthChatService:
    """Get the chat service built at startup from application state."""
    service = getattr(request.app.state, "chat_service", None)
    if service is None:
        raise RuntimeError("Chat service is not initialized")
    return service


# Type aliases for dependency injection
ChatServiceDep = Annotated[HealthChatService, Depends(get_chat_service)]
