# azclients/shared/logging_config.py
"""
Structured logging for the clients.

Every module logs through :func:`get_logger`, which hands structlog events
to a standard ``logging.Logger`` named after the module. The embedding
application's logging level and handlers therefore decide what is shown;
with no logging set up at all, debug traffic logs stay silent.

:func:`configure_logging` is an optional convenience for scripts and
services that want the same JSON / console output the clients were
developed with.
"""
import logging
import sys
from typing import Any, Mapping

import structlog
from opentelemetry import trace

from azclients.shared.config import settings

REDACTED = "REDACTED"

# Header values that must never reach a log sink
SENSITIVE_HEADERS = frozenset({"authorization", "x-ms-authorization-auxiliary"})


def get_logger(name: str):
    """structlog logger bound to ``logging.getLogger(name)``."""
    return structlog.wrap_logger(logging.getLogger(name))


def redact_headers(headers: Mapping[str, Any]) -> dict:
    """Copy of ``headers`` safe for logging."""
    return {
        name: (REDACTED if name.lower() in SENSITIVE_HEADERS else value)
        for name, value in headers.items()
    }


def add_trace_context(_, __, event_dict):
    """
    Tag the event with the ids of the active span, so a failed call's log
    line can be found next to its trace. Outside a span nothing is added.
    """
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = format(span_context.trace_id, "032x")
        event_dict["span_id"] = format(span_context.span_id, "016x")
    return event_dict


def redact_header_fields(_, __, event_dict):
    """Applies :func:`redact_headers` to any ``headers`` field of an event."""
    headers = event_dict.get("headers")
    if isinstance(headers, Mapping):
        event_dict["headers"] = redact_headers(headers)
    return event_dict


def configure_logging():
    """
    Route structlog through the standard library with JSON output
    (``LOG_FORMAT=json``) or colored console output, at ``LOG_LEVEL``.
    """
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_trace_context,
        redact_header_fields,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=settings.LOG_LEVEL.upper(),
    )
