"""Observability module for structured logging."""

from .logging import (
    RequestContextManager,
    get_logger,
    log_external_call_end,
    log_external_call_start,
    request_id_var,
    setup_logging,
    user_var,
)

__all__ = [
    # Setup
    "setup_logging",
    "get_logger",
    # Context
    "RequestContextManager",
    "request_id_var",
    "user_var",
    # Logging helpers
    "log_external_call_start",
    "log_external_call_end",
]
