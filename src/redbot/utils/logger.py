"""
Structured logging configuration using structlog.

Provides JSON-formatted logging for library consumers and a colored
console renderer for local development.
"""
import logging
import os
import sys
from typing import Any, Mapping

import structlog


def setup_logging(level: str = "INFO") -> None:
    """
    Configure structured logging with structlog.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Sets up:
        - JSON output format by default
        - Console output with colors when ENVIRONMENT=development
        - Context processors for timestamps and log levels
        - Output through the standard library "logging" handlers
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    is_dev = os.getenv("ENVIRONMENT", "production") == "development"

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if is_dev:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    The logger always writes through the standard library logger of the
    same name, so its level and handlers decide what is shown even when
    setup_logging has not been called.

    Args:
        name: Logger name (typically __name__ of calling module)

    Returns:
        Configured structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("login_started", username="my-bot-account")
    """
    return structlog.wrap_logger(logging.getLogger(name))


def mask_secret(value: str, visible: int = 6) -> str:
    """
    Shorten a secret for log output.

    Example:
        >>> mask_secret("abcdefghijkl")
        'abcdef...'
    """
    if len(value) <= visible:
        return "***"
    return f"{value[:visible]}..."


def log_request(
    method: str,
    url: str,
    status_code: int,
    duration_ms: float,
    **extra: Any,
) -> None:
    """
    Log one completed HTTP exchange in structured format.

    Args:
        method: HTTP method sent
        url: Absolute URL requested (without query string)
        status_code: Status returned by the server
        duration_ms: Round trip time in milliseconds
        **extra: Additional context to log
    """
    logger = get_logger("redbot.http")

    log_data: Mapping[str, Any] = {
        "method": method,
        "url": url,
        "status_code": status_code,
        "duration_ms": round(duration_ms, 2),
        **extra,
    }

    if status_code >= 400:
        logger.warning("http_request_failed", **log_data)
    else:
        logger.debug("http_request_completed", **log_data)
