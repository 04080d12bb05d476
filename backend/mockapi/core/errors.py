"""Error Hierarchy — typed, categorized exceptions for every MockAPI failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) describe what the caller or config author must fix
    - Configuration defects in the route table surface as 500 (author bug, not client bug)
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with MockApiError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - Diagnostic payload (field names, unmatched path) travels in ErrorContext.details
      so the envelope shape never changes per error type
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RESOURCE_NOT_FOUND = "resource_not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    method: str | None = None
    request_path: str | None = None
    details: dict[str, Any] | None = None


class MockApiError(Exception):
    """Base exception for all MockAPI errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "method": self.context.method,
                    "request_path": self.context.request_path,
                    **(self.context.details or {}),
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class RequestBodyError(MockApiError):
    """Request body violates the matched rule's body contract."""
    def __init__(
        self, message: str, code: str, fields: list[str],
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.details = {**(ctx.details or {}), "fields": list(fields)}
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.fields = list(fields)


class InvalidRequestBodyError(MockApiError):
    """Request body is present but is not valid JSON."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Request body is not valid JSON: {reason}",
            "INVALID_REQUEST_BODY", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class InvalidNotificationTargetError(MockApiError):
    """Value of the notification follow property is not an absolute http(s) URL."""
    def __init__(
        self, follow_prop: str, value: Any, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.details = {**(ctx.details or {}), "follow_prop": follow_prop}
        super().__init__(
            f"Field '{follow_prop}' must hold an absolute http(s) URL, got {value!r}",
            "INVALID_NOTIFICATION_TARGET", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.follow_prop = follow_prop


class ConfigFetchError(MockApiError):
    """Configuration document could not be retrieved from any source."""
    def __init__(self, errors: list[str], context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.details = {**(ctx.details or {}), "sources": list(errors)}
        super().__init__(
            "Failed to retrieve the mock configuration document",
            "CONFIG_FETCH_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.errors = list(errors)


class ConfigValidationError(MockApiError):
    """Configuration (or data) document failed to parse or validate."""
    def __init__(self, errors: list[str], context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.details = {**(ctx.details or {}), "errors": list(errors)}
        super().__init__(
            f"Invalid mock configuration: {'; '.join(errors)}",
            "CONFIG_INVALID", ErrorCategory.CONFIGURATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.errors = list(errors)


# ─── Resolution Misses (404 / 405) ──────────────────────────────

class MethodNotAllowedError(MockApiError):
    """No rule list is declared for the request method."""
    def __init__(
        self,
        method: str,
        context: ErrorContext | None = None,
        allowed: tuple[str, ...] = (),
    ):
        super().__init__(
            f"Method {method} is not declared in the route table",
            "METHOD_NOT_ALLOWED", ErrorCategory.METHOD_NOT_ALLOWED,
            ErrorSeverity.WARNING, context, 405,
        )
        self.method = method
        self.allowed = allowed


class RouteNotFoundError(MockApiError):
    """No rule of the method's list matches the request path."""
    def __init__(self, request_path: str, context: ErrorContext | None = None):
        super().__init__(
            "The requested entity was not found in the current location: "
            f"{request_path}",
            "ROUTE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.request_path = request_path


class DataNotFoundError(MockApiError):
    """Response data file or data path could not be resolved."""
    def __init__(
        self, db_file: str, db_data_path: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.details = {
            **(ctx.details or {}),
            "db_file": db_file, "db_data_path": db_data_path,
        }
        super().__init__(
            f"No response data at '{db_data_path}' in '{db_file}'",
            "DATA_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


# ─── Configuration Defects (500-level) ──────────────────────────

class InvalidRouteTableError(MockApiError):
    """A method's rule list is not a sequence of rules."""
    def __init__(self, method: str, found_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid rule list for method {method}: expected a list, found {found_type}",
            "INVALID_ROUTE_TABLE", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.method = method


class InvalidRoutePatternError(MockApiError):
    """A route template cannot be compiled into a matcher."""
    def __init__(self, template: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid route pattern '{template}': {reason}",
            "INVALID_ROUTE_PATTERN", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.template = template


# ─── Infrastructure Errors ──────────────────────────────────────

class RawFileFetchError(MockApiError):
    """Every candidate source failed to return the requested file."""
    def __init__(
        self, file_name: str, errors: list[str], context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.details = {**(ctx.details or {}), "sources": list(errors)}
        super().__init__(
            f"Failed to retrieve '{file_name}' from any source",
            "RAW_FILE_FETCH_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, ctx, 502,
        )
        self.file_name = file_name
        self.errors = list(errors)
