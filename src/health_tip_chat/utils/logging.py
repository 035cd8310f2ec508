"""Structured logging for the chat API.

Console output for local runs, one JSON object per line when ``log_json``
is set. Every request gets a short ``request_id`` bound through structlog
contextvars, so retry warnings and model failures logged deep inside the
model client can be traced back to the HTTP call that caused them.
"""

import logging
import sys
import uuid
from typing import Any

import structlog


def build_processors(json_logs: bool = False) -> list[Any]:
    """Processor chain ending in the JSON or console renderer."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_logs:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors += [
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(),
        ]
    return processors


def configure_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure stdlib logging and structlog once per process.

    Args:
        log_level: Level name; unknown names fall back to INFO
        json_logs: Render events as JSON lines instead of console text
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    # uvicorn and httpx log through stdlib logging
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    structlog.configure(
        processors=build_processors(json_logs),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_request_context(method: str, path: str) -> str:
    """
    Start the log context of one HTTP request.

    Clears whatever the previous request on this task left behind.

    Returns:
        The generated request id
    """
    request_id = uuid.uuid4().hex[:12]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=method,
        path=path,
    )
    return request_id


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger."""
    return structlog.get_logger(name)
