"""Utility modules."""

from health_tip_chat.utils.logging import (
    bind_request_context,
    configure_logging,
    get_logger,
)

__all__ = ["bind_request_context", "configure_logging", "get_logger"]
