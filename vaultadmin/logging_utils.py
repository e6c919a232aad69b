"""
Structured logging utilities for vaultadmin.

Provides context management and structured logging helpers so billing and
admin log lines carry the organization, provider and request they belong to.

Usage:
    from vaultadmin.logging_utils import get_logger, add_log_context

    logger = get_logger(__name__)

    with add_log_context(organization_id=org.id, user_id=user.id):
        logger.info("Fetching billing info")
"""

import logging
from typing import Any, Dict, Optional
from contextvars import ContextVar
from django.http import HttpRequest


# Per-thread / per-task storage for log context
_log_context: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


class ContextualLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that automatically includes context in log records.

    Context set with ``set_log_context`` or ``add_log_context`` is merged
    into the ``extra`` of every record.
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        context = _log_context.get({})

        extra = kwargs.get("extra", {})
        extra.update(context)
        kwargs["extra"] = extra

        return msg, kwargs


def get_logger(name: str) -> ContextualLoggerAdapter:
    """
    Get a logger with automatic context injection.

    Args:
        name: Logger name (typically __name__)

    Returns:
        ContextualLoggerAdapter: Logger with context support
    """
    base_logger = logging.getLogger(name)
    return ContextualLoggerAdapter(base_logger, {})


def set_log_context(**kwargs: Any) -> None:
    """Set context for all subsequent log messages in this context."""
    current_context = _log_context.get({}).copy()
    current_context.update(kwargs)
    _log_context.set(current_context)


def clear_log_context() -> None:
    """Clear all log context for the current context."""
    _log_context.set({})


def get_log_context() -> Dict[str, Any]:
    """Get a copy of the current log context."""
    return _log_context.get({}).copy()


class add_log_context:
    """
    Context manager to temporarily add log context.

    Usage:
        with add_log_context(organization_id=123, operation='billing'):
            logger.info("Processing")  # Includes organization_id and operation
        # Context is restored after the block
    """

    def __init__(self, **kwargs: Any):
        self.new_context = kwargs
        self.previous_context: Optional[Dict[str, Any]] = None

    def __enter__(self):
        self.previous_context = get_log_context()
        set_log_context(**self.new_context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.previous_context is not None:
            _log_context.set(self.previous_context)
        else:
            clear_log_context()


def extract_request_context(request: HttpRequest) -> Dict[str, Any]:
    """
    Extract logging context from an HTTP request.

    Args:
        request: Django (or DRF) HTTP request

    Returns:
        Dict[str, Any]: Context dictionary with request information
    """
    context = {}

    # Set by RequestIdMiddleware
    request_id = getattr(request, "request_id", None) or get_log_context().get(
        "request_id"
    )
    if request_id:
        context["request_id"] = request_id

    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        context["user_id"] = user.id
        context["username"] = user.get_username()

    context["method"] = request.method
    context["path"] = request.path

    return context


class StructuredLogFormatter(logging.Formatter):
    """
    Log formatter that outputs structured (key=value) logs.

    Example output:
        2024-01-28 10:30:45 INFO organization_id=42 request_id=abc message="Built billing summary"
    """

    CONTEXT_FIELDS = (
        "organization_id",
        "provider_id",
        "user_id",
        "username",
        "request_id",
        "method",
        "path",
    )

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        parts = [f"{timestamp} {record.levelname} logger={record.name}"]

        for field in self.CONTEXT_FIELDS:
            if hasattr(record, field):
                value = getattr(record, field)
                # Quote strings with spaces
                if isinstance(value, str) and " " in value:
                    parts.append(f'{field}="{value}"')
                else:
                    parts.append(f"{field}={value}")

        msg = record.getMessage()
        if " " in msg or "=" in msg:
            parts.append(f'message="{msg}"')
        else:
            parts.append(f"message={msg}")

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)

        if record.exc_text:
            parts.append(f"\n{record.exc_text}")

        return " ".join(parts)
