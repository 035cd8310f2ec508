"""Exception handlers mapping domain errors to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from health_tip_chat.api.routes import ENDPOINTS
from health_tip_chat.core.exceptions import InvalidInputError, ModelCallError
from health_tip_chat.utils.logging import get_logger


logger = get_logger(__name__)


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.info("Rejected request", path=request.url.path, field=exc.field, error=exc.message)
    return JSONResponse(status_code=400, content={"error": exc.message})


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    logger.info("Malformed request body", path=request.url.path, errors=len(details))
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": details},
    )


async def model_call_handler(request: Request, exc: ModelCallError) -> JSONResponse:
    logger.error(
        "Request failed on model call",
        path=request.url.path,
        kind=exc.kind.value,
        attempts=exc.attempts,
    )
    return JSONResponse(
        status_code=500,
        content={"error": f"Model call failed: {exc.message}", "kind": exc.kind.value},
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={
                "error": f"Route not found: {request.method} {request.url.path}",
                "available_endpoints": ENDPOINTS,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    """Install all exception handlers on the application."""
    app.add_exception_handler(InvalidInputError, invalid_input_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ModelCallError, model_call_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
