"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - HTTP methods are always upper-case once they enter domain logic
    - CONFIG_FILE_NAME doubles as the dbFile sentinel meaning "read from the config itself"
    - MISSING is the only "absent" signal of deep-path lookups (None is a real value)

Design Decisions:
    - str Enums: serialize to JSON without custom encoders and compare equal to raw strings
    - MISSING as a singleton class instance: identity check, falsy, readable repr
"""

from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

RequestPath = NewType("RequestPath", str)      # normalized: "/a/b", never trailing "/"
RouteTemplate = NewType("RouteTemplate", str)  # prefix + rule path, normalized

CONFIG_FILE_NAME = ".mockapi.yml"
DEFAULT_NOTIFICATION_TIMEOUT_SECONDS: float = 5.0


# ─── Enums ───────────────────────────────────────────────────────

class HttpMethod(str, Enum):
    """Inbound methods served by the mock route."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class NotificationMethod(str, Enum):
    """Verbs allowed for the deferred outbound notification."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


# ─── Sentinels ───────────────────────────────────────────────────

class _Missing:
    """Marker for a deep path with no corresponding node."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()
