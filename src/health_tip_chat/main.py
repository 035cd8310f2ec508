"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from health_tip_chat import __version__
from health_tip_chat.api import register_exception_handlers, router
from health_tip_chat.api.models import ServiceInfoResponse
from health_tip_chat.api.routes import ENDPOINTS
from health_tip_chat.app import Application
from health_tip_chat.config.settings import Settings, get_settings
from health_tip_chat.services.health_chat import HealthChatService
from health_tip_chat.utils.logging import (
    bind_request_context,
    configure_logging,
    get_logger,
)


logger = get_logger(__name__)

SERVICE_NAME = "Health Tip Chat API"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Builds the chat service unless one was injected. A ConfigurationError
    raised here aborts startup.
    """
    application: Application = app.state.application

    if app.state.chat_service is None:
        await application.startup()
        app.state.chat_service = application.chat_service

    yield

    await application.shutdown()


def create_app(
    settings: Settings | None = None,
    chat_service: HealthChatService | None = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings to use instead of the environment
        chat_service: Prebuilt service; skips provider setup at startup

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, json_logs=settings.log_json)

    app = FastAPI(
        title=SERVICE_NAME,
        description="Health assistant chat backed by a generative model",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.application = Application(settings)
    app.state.chat_service = chat_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = bind_request_context(request.method, request.url.path)
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    register_exception_handlers(app)
    app.include_router(router, prefix="/api")

    @app.get("/", response_model=ServiceInfoResponse)
    async def root() -> ServiceInfoResponse:
        return ServiceInfoResponse(
            name=SERVICE_NAME,
            version=__version__,
            endpoints=ENDPOINTS,
        )

    return app


# Create application instance
app = create_app()


def main() -> None:
    """Entry point for running the application."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "health_tip_chat.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
