"""Error Hierarchy: typed, categorized exceptions for all JsonSpark failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (4xx) are raised before any store call; StoreError is the only 5xx
    - to_response() produces the REST envelope; details appear only when requested

Design Decisions:
    - Single hierarchy with JsonSparkError base: one global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    UPSTREAM = "upstream"
    ROUTING = "routing"
    ADMISSION = "admission"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and debug responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    slug: str | None = None
    debug_info: str | None = None
    retry_after_seconds: int | None = None


class JsonSparkError(Exception):
    """Base exception for all JsonSpark errors."""

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

    def to_response(self, include_details: bool = False) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.context.slug is not None:
            body["slug"] = self.context.slug
        if include_details and self.context.debug_info:
            body["details"] = self.context.debug_info
        return {"error": body}


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidInputError(JsonSparkError):
    """Request input failed validation (missing field, bad slug, malformed JSON)."""
    def __init__(
        self, message: str, code: str = "VALIDATION_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class MissingFieldsError(InvalidInputError):
    def __init__(self, fields: list[str], context: ErrorContext | None = None):
        super().__init__("Missing required fields", "MISSING_FIELDS", context)
        self.fields = fields
        if not self.context.debug_info:
            self.context.debug_info = f"missing: {', '.join(fields)}"


class InvalidSlugError(InvalidInputError):
    def __init__(self, slug: object, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = f"slug must match [a-z0-9-]+, got {slug!r}"
        super().__init__("Invalid slug format", "INVALID_SLUG", ctx)


class InvalidJsonError(InvalidInputError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Invalid JSON data", "INVALID_JSON", context)


class SlugConflictError(JsonSparkError):
    """A document with this slug already exists."""
    def __init__(self, slug: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.slug = slug
        super().__init__(
            "Slug already exists", "SLUG_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )


class DocumentNotFoundError(JsonSparkError):
    """No live document for this slug."""
    def __init__(self, slug: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.slug = slug
        super().__init__(
            "API not found", "RESOURCE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO, ctx, 404,
        )


class RouteNotFoundError(JsonSparkError):
    """No route matches the request path."""
    def __init__(self, path: str, context: ErrorContext | None = None):
        super().__init__(
            "Endpoint not found", "ROUTE_NOT_FOUND", ErrorCategory.ROUTING,
            ErrorSeverity.INFO, context, 404,
        )
        self.path = path


class PayloadTooLargeError(JsonSparkError):
    def __init__(self, limit_bytes: int, context: ErrorContext | None = None):
        super().__init__(
            f"Request body exceeds {limit_bytes} bytes", "PAYLOAD_TOO_LARGE",
            ErrorCategory.ADMISSION, ErrorSeverity.WARNING, context, 413,
        )
        self.limit_bytes = limit_bytes


class RateLimitExceededError(JsonSparkError):
    def __init__(self, retry_after_seconds: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.retry_after_seconds = retry_after_seconds
        super().__init__(
            "Too many requests from this IP, please try again later",
            "RATE_LIMITED", ErrorCategory.ADMISSION,
            ErrorSeverity.WARNING, ctx, 429,
        )


# ─── Upstream Errors (500-level) ────────────────────────────────

class StoreError(JsonSparkError):
    """Document store unreachable or the operation failed."""
    def __init__(self, operation: str, cause: Exception | str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = f"{operation}: {cause}"
        super().__init__(
            "Internal server error", "STORE_ERROR", ErrorCategory.UPSTREAM,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
