# =============================================================================
# gateway/log.py - Structured JSON Logging
# =============================================================================
# Renders stdlib logging records as one JSON object per line with structlog:
#
#   {"level": "info", "timestamp": "...", "message": "...", ...context}
#
# info/warn records go to stdout, error records go to stderr.
# Context fields are attached with the `extra` keyword:
#
#   logger.info("Incoming request", extra={"context": {"method": "GET"}})
#
# Values bound with structlog.contextvars (e.g. the request ID) are merged
# into every record logged while handling that request.
# Records carrying exc_info also get "error" (message) and "stack" fields.
# =============================================================================

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

# Python level -> level name written in the JSON record
LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}

# LOG_LEVEL value -> Python level
LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def utc_timestamp(created: float | None = None) -> str:
    """Return an ISO8601 UTC timestamp (now, or for a given epoch time)."""
    if created is None:
        moment = datetime.now(timezone.utc)
    else:
        moment = datetime.fromtimestamp(created, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_level(name: str) -> int:
    """Map a LOG_LEVEL string to a logging level, defaulting to INFO."""
    return LEVELS.get(name.strip().lower(), logging.INFO)


# =============================================================================
# Processors
# =============================================================================

def _add_level(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    record = event_dict.get("_record")
    if record is not None:
        event_dict["level"] = LEVEL_NAMES.get(record.levelno, record.levelname.lower())
    else:
        event_dict["level"] = method_name
    return event_dict


def _add_record_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Merge the `context` dict passed through `extra=`."""
    context = getattr(event_dict.get("_record"), "context", None)
    if context:
        event_dict.update(context)
    return event_dict


def _add_error_fields(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Turn exc_info into "error" (message) and "stack" (traceback)."""
    exc_info = event_dict.get("exc_info")
    if isinstance(exc_info, tuple) and exc_info[1] is not None:
        exc = exc_info[1]
        event_dict.setdefault("error", str(exc) or type(exc).__name__)

    event_dict = structlog.processors.format_exc_info(logger, method_name, event_dict)
    if "exception" in event_dict:
        stack = event_dict.pop("exception")
        event_dict.setdefault("stack", stack.rstrip())
    return event_dict


def _order_fields(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """level, timestamp, message first; "event" is renamed to "message"."""
    ordered = {
        "level": event_dict.pop("level", method_name),
        "timestamp": event_dict.pop("timestamp", None),
        "message": event_dict.pop("event", ""),
    }
    ordered.update(event_dict)
    return ordered


PRE_CHAIN = [
    structlog.contextvars.merge_contextvars,
    _add_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
    _add_record_context,
    _add_error_fields,
]


def json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """A logging.Formatter that renders records as JSON lines."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=PRE_CHAIN,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _order_fields,
            structlog.processors.JSONRenderer(),
        ],
    )


# =============================================================================
# Handlers
# =============================================================================

class _BelowErrorFilter(logging.Filter):
    """Only let through records below ERROR (stdout stream)."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.ERROR


def _stream_handler(stream, level: int, below_error: bool) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(json_formatter())
    if below_error:
        handler.addFilter(_BelowErrorFilter())
    # Marks handlers we own so reconfiguring replaces only them
    handler._gateway_handler = True
    return handler


def configure_logging(level_name: str = "info") -> None:
    """
    Install the JSON stdout/stderr handlers on the root logger.

    Safe to call more than once: previously installed gateway handlers are
    replaced, other handlers (e.g. pytest's capture handler) are kept.
    """
    level = parse_level(level_name)
    root = logging.getLogger()

    for handler in list(root.handlers):
        if getattr(handler, "_gateway_handler", False):
            root.removeHandler(handler)

    root.addHandler(_stream_handler(sys.stdout, logging.DEBUG, below_error=True))
    root.addHandler(_stream_handler(sys.stderr, logging.ERROR, below_error=False))
    root.setLevel(level)
