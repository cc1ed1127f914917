"""Error Handlers: global exception handlers for the JsonSpark API.

Invariants:
    - JsonSparkError → structured JSON with error code, message, severity
    - RequestValidationError → 400 with field-level details
    - Unmatched routes → 404 with the list of available endpoints
    - Exception (catch-all) → JSON 500; details only outside production

Design Decisions:
    - Four-layer handler: domain (JsonSparkError), validation (Pydantic),
      HTTP (Starlette routing/413), catch-all (Exception)
    - include_details resolved from settings at registration, not per request
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jsonspark.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, JsonSparkError,
    PayloadTooLargeError, RouteNotFoundError,
)

logger = logging.getLogger(__name__)

AVAILABLE_ENDPOINTS = [
    "GET /health",
    "GET /api",
    "POST /api/create",
    "GET /api/:slug",
    "PUT /api/:slug",
    "DELETE /api/:slug",
]


def register_error_handlers(app: FastAPI, include_details: bool = False) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app, include_details)
    _register_validation_error_handler(app)
    _register_http_error_handler(app, include_details)
    _register_generic_error_handler(app, include_details)


def _register_domain_error_handler(app: FastAPI, include_details: bool) -> None:

    @app.exception_handler(JsonSparkError)
    async def jsonspark_error_handler(request: Request, exc: JsonSparkError):
        """Handle all JsonSpark domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"JsonSparkError: {exc.message}",
            extra={
                "error_code": exc.code, "path": request.url.path,
                "slug": exc.context.slug,
            },
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(include_details),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

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


def _register_http_error_handler(app: FastAPI, include_details: bool) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Routing 404s get a help payload, 413 from streamed bodies a domain error."""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            err = RouteNotFoundError(request.url.path)
            content = err.to_response(include_details)
            content["availableEndpoints"] = AVAILABLE_ENDPOINTS
            return JSONResponse(status_code=err.http_status, content=content)

        if exc.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE:
            limit = app.state.settings.max_body_bytes
            err = PayloadTooLargeError(limit)
            return JSONResponse(
                status_code=err.http_status,
                content=err.to_response(include_details),
            )

        err = JsonSparkError(
            str(exc.detail), f"HTTP_{exc.status_code}", ErrorCategory.ROUTING,
            ErrorSeverity.INFO, ErrorContext(), exc.status_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=err.to_response(include_details),
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI, include_details: bool) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: well-formed JSON 500, internals only outside production."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        body = {
            "code": "INTERNAL_ERROR",
            "message": "Internal server error",
            "category": ErrorCategory.INTERNAL.value,
            "severity": ErrorSeverity.CRITICAL.value,
        }
        if include_details:
            body["details"] = str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": body},
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.WARNING.value,
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
