"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Request extras (method, path, error_code) and outbound extras (url, candidate,
      status_code, delay_seconds) surfaced when present
    - setup_logging is idempotent: calling it again replaces the handler it installed
    - httpx/httpcore request chatter stays at WARNING unless the service runs at DEBUG

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan
    - Every candidate fetch and notification is already logged by the service with its
      own extras, so the client library's per-request INFO lines are redundant
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_KEYS = (
    "method", "path", "error_code", "url", "candidate",
    "template", "delay_seconds", "status_code",
)
_CLIENT_LOGGERS = ("httpx", "httpcore")
_HANDLER_NAME = "mockapi"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines with the request method and path appended when known."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        method = record.__dict__.get("method")
        path = record.__dict__.get("path")
        if method and path:
            line = f"{line} [{method} {path}]"
        return line


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())

    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)

    root_level = getattr(logging, level.upper(), logging.INFO)
    logging.root.setLevel(root_level)
    client_level = logging.DEBUG if root_level <= logging.DEBUG else logging.WARNING
    for name in _CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(client_level)
    return handler
