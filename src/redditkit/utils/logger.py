"""
structlog configuration for redditkit.

`setup_logging` picks the renderer from ENVIRONMENT (JSON unless it
is "development") and sets the stdlib level praw and prawcore log
at. `log_api_call` records one line per Reddit REST call.
"""
import logging
import os
import sys
from typing import Any

import structlog


def setup_logging(level: str = "INFO") -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            unknown names fall back to INFO

    structlog events are printed to stdout, filtered at `level`, with
    an ISO UTC timestamp and the level name added. They are rendered as
    JSON lines, or by structlog's ConsoleRenderer when
    ENVIRONMENT=development. Records from praw and prawcore go through
    stdlib logging at the same level.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    if os.getenv("ENVIRONMENT", "production") == "development":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of calling module)

    Returns:
        Configured structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("post_submitted", fullname="t3_abc123")
    """
    return structlog.get_logger(name)


def log_api_call(
    method: str,
    path: str,
    duration_ms: float,
    error: str | None = None,
    **extra: Any,
) -> None:
    """
    Log a single Reddit REST call in structured format.

    Args:
        method: HTTP verb (GET, POST, DELETE)
        path: Request path relative to the API root
        duration_ms: Round-trip time in milliseconds
        error: Error type name if the call failed
        **extra: Additional context to log

    Example:
        >>> log_api_call(
        ...     method="POST",
        ...     path="api/submit",
        ...     duration_ms=412.7,
        ...     response_type="PostResultShortContainer",
        ... )
    """
    logger = get_logger("reddit_api")

    log_data = {
        "method": method,
        "path": path,
        "duration_ms": round(duration_ms, 2),
        "error": error,
        **extra,
    }

    if error:
        logger.error("reddit_request_failed", **log_data)
    else:
        logger.info("reddit_request_completed", **log_data)
