"""Structured Logging — formatter output and logging setup.

Tests cover:
    - JSON lines carry base fields plus only the extras that are set
    - non-JSON extra values are stringified instead of breaking the line
    - text lines append [METHOD path] when the record carries both
    - setup_logging installed twice leaves a single handler
    - httpx/httpcore quieted to WARNING except when the service runs at DEBUG
"""

import json
import logging
from pathlib import PurePosixPath

import pytest

from mockapi.infrastructure.observability import (
    JSONFormatter,
    TextFormatter,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    client_levels = {n: logging.getLogger(n).level for n in ("httpx", "httpcore")}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, client_level in client_levels.items():
        logging.getLogger(name).setLevel(client_level)


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("mockapi.test", logging.INFO, __file__, 1, msg, None, None)
    record.__dict__.update(extra)
    return record


# ─── formatters ──────────────────────────────────────────────────

def test_json_line_with_extras():
    line = json.loads(JSONFormatter().format(
        _record(method="GET", path="/api/items", error_code=None),
    ))
    assert line["level"] == "INFO"
    assert line["logger"] == "mockapi.test"
    assert line["message"] == "hello"
    assert line["method"] == "GET"
    assert line["path"] == "/api/items"
    assert "error_code" not in line


def test_json_line_stringifies_unknown_values():
    line = json.loads(JSONFormatter().format(_record(path=PurePosixPath("/api/items"))))
    assert line["path"] == "/api/items"


def test_text_line_appends_request():
    line = TextFormatter().format(_record(method="POST", path="/api/items"))
    assert line.endswith("mockapi.test: hello [POST /api/items]")


def test_text_line_without_request():
    assert TextFormatter().format(_record()).endswith("mockapi.test: hello")


# ─── setup_logging ───────────────────────────────────────────────

def test_setup_is_idempotent():
    first = setup_logging("INFO", "json")
    second = setup_logging("INFO", "text")

    root = logging.getLogger()
    assert first not in root.handlers
    assert [h for h in root.handlers if h.get_name() == "mockapi"] == [second]
    assert isinstance(second.formatter, TextFormatter)


@pytest.mark.parametrize("level, expected", [
    ("INFO", logging.WARNING),
    ("warning", logging.WARNING),
    ("DEBUG", logging.DEBUG),
])
def test_client_loggers_follow_service_level(level, expected):
    setup_logging(level, "json")
    assert logging.getLogger("httpx").level == expected
    assert logging.getLogger("httpcore").level == expected
