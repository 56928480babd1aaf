"""Structured Logging - JSON formatter and setup for client observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Request extras (method, path, status_code, outcome, error_code) surfaced when present
    - Bearer/Basic credential values are masked in every formatted message,
      including exception text
    - JSON format by default, human-readable for local development

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - Masking in the formatter, not at call sites: transport exceptions can echo
      request headers and are logged verbatim
"""

import json
import logging
import re
from datetime import datetime, timezone

_EXTRA_KEYS = ("method", "path", "status_code", "outcome", "error_code")
_CREDENTIAL = re.compile(r"\b(Bearer|Basic)\s+[A-Za-z0-9._~+/=-]+")


def redact_credentials(text: str) -> str:
    return _CREDENTIAL.sub(r"\1 ***", text)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON with credentials masked."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_credentials(record.getMessage()),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = redact_credentials(self.formatException(record.exc_info))
        return json.dumps(log, ensure_ascii=False)


class RedactingFormatter(logging.Formatter):
    """Plain-text formatter for development, same masking as JSONFormatter."""

    def format(self, record: logging.LogRecord) -> str:
        return redact_credentials(super().format(record))


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging once. Returns the installed handler."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(RedactingFormatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
