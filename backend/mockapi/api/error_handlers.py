"""Error Handlers — global exception handlers for the MockAPI service.

Invariants:
    - MockApiError → structured JSON with error code, message, severity, and its own status
    - RequestValidationError → field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (MockApiError), validation (Pydantic), catch-all (Exception)
    - Client misses logged at WARNING, configuration/infrastructure defects at ERROR
    - 405 responses carry an Allow header built from the declared method keys
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from mockapi.core.errors import MethodNotAllowedError, MockApiError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_mock_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_mock_api_error_handler(app: FastAPI) -> None:
    """Register MockAPI domain/infrastructure error handler."""

    @app.exception_handler(MockApiError)
    async def mock_api_error_handler(request: Request, exc: MockApiError):
        """Handle all MockAPI domain/infrastructure errors."""
        level = logging.WARNING if exc.http_status < 500 else logging.ERROR
        if exc.severity == ErrorSeverity.CRITICAL:
            level = logging.ERROR
        logger.log(
            level,
            f"MockApiError: {exc.message}",
            extra={
                "error_code": exc.code,
                "method": request.method,
                "path": request.url.path,
            },
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(),
            headers=_allow_header(exc),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _allow_header(exc: MockApiError) -> dict[str, str] | None:
    """405 answers list the methods the route table does declare."""
    if isinstance(exc, MethodNotAllowedError) and exc.allowed:
        return {"Allow": ", ".join(exc.allowed)}
    return None


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
