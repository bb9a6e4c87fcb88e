"""Logging configuration: JSON or text output with correlation IDs."""

from __future__ import annotations

import json
import logging
import re
from datetime import UTC, datetime
from typing import Any

# Extra-field names whose values never reach log output
MASKED_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"wallet", re.IGNORECASE),
    re.compile(r"address", re.IGNORECASE),
    re.compile(r"secret", re.IGNORECASE),
    re.compile(r"token", re.IGNORECASE),
]

MASKED = "***"

_STANDARD_RECORD_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "correlation_id"}


def is_masked_key(key: str) -> bool:
    """Check if an extra-field name matches any masked pattern."""
    return any(p.search(key) for p in MASKED_PATTERNS)


def mask_extras(data: dict[str, Any]) -> dict[str, Any]:
    """Replace masked values in a dict of extra fields, recursively."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if is_masked_key(key):
            result[key] = MASKED
        elif isinstance(value, dict):
            result[key] = mask_extras(value)
        else:
            result[key] = value
    return result


class JSONFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            log_entry["correlation_id"] = correlation_id

        log_entry["source"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
        }

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "message": str(record.exc_info[1]),
            }

        extras = {
            k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_KEYS
        }
        if extras:
            log_entry["extra"] = mask_extras(extras)

        return json.dumps(log_entry, default=str)


class CorrelationFilter(logging.Filter):
    """Stamp the current correlation ID on every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        from quiniela.core.context import get_correlation_id

        record.correlation_id = get_correlation_id()
        return True


def setup_logging(level: str = "INFO", log_format: str = "text") -> None:
    """Configure application-wide logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: "json" for structured JSON output, "text" for human-readable.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler()
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    handler.addFilter(CorrelationFilter())
    root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
