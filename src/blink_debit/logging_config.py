"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

REDACTED_BEARER_TOKEN = "***REDACTED BEARER TOKEN***"


def sanitise_headers(headers: Any) -> dict[str, Any]:
    """Copy ``headers`` with the Authorization value masked."""
    return {
        key: REDACTED_BEARER_TOKEN if key.lower() == "authorization" and value else value
        for key, value in dict(headers).items()
    }


def redact_authorization(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask the bearer token in any logged ``headers`` mapping."""
    headers = event_dict.get("headers")
    if isinstance(headers, dict):
        event_dict["headers"] = sanitise_headers(headers)
    return event_dict


def configure_logging(
    log_level: str = "INFO",
    format_as_json: bool = True,
) -> None:
    """
    Configure structured logging for applications using the client.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_as_json: If True, output logs as JSON; otherwise use console format
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        redact_authorization,
    ]

    if format_as_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
