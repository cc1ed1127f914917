"""HTTP Policies: ASGI middleware for the cross-cutting rules applied before routing.

Invariants:
    - Rate limiting counts every request per client address, 429 once exhausted
    - Bodies above max_body_bytes are refused with 413 (Content-Length or streamed)
    - Security headers are set on every response that passes through
    - One request log line per completed request on the "jsonspark.request" logger

Design Decisions:
    - Pure ASGI middleware over BaseHTTPMiddleware: no body buffering, and
      streamed-body counting needs to wrap receive()
    - Oversized streamed bodies raise HTTPException(413): FastAPI re-raises
      HTTPException from body parsing, other exceptions become a generic 400
"""

import logging
import time

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from jsonspark.core.errors import PayloadTooLargeError, RateLimitExceededError
from jsonspark.infrastructure.rate_limiter import FixedWindowRateLimiter

request_logger = logging.getLogger("jsonspark.request")

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Content-Security-Policy": "default-src 'self'",
}


def client_address(scope: Scope) -> str:
    client = scope.get("client")
    return client[0] if client else "unknown"


class RateLimitMiddleware:
    """Fixed-window admission control keyed by client address."""

    def __init__(self, app: ASGIApp, limiter: FixedWindowRateLimiter):
        self.app = app
        self.limiter = limiter

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        decision = self.limiter.hit(client_address(scope))
        rate_headers = decision.headers()
        if not decision.allowed:
            exc = RateLimitExceededError(decision.reset_after)
            request_logger.warning(
                "Rate limit exceeded",
                extra={"client": client_address(scope), "path": scope["path"]},
            )
            response = JSONResponse(
                exc.to_response(), status_code=exc.http_status,
                headers={**rate_headers, "Retry-After": str(decision.reset_after)},
            )
            await response(scope, receive, send)
            return

        async def send_with_rate_headers(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message).update(rate_headers)
            await send(message)

        await self.app(scope, receive, send_with_rate_headers)


class BodySizeLimitMiddleware:
    """Reject request bodies larger than max_bytes."""

    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_bytes:
            exc = PayloadTooLargeError(self.max_bytes)
            response = JSONResponse(exc.to_response(), status_code=exc.http_status)
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    raise HTTPException(
                        status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        detail=f"Request body exceeds {self.max_bytes} bytes",
                    )
            return message

        await self.app(scope, limited_receive, send)


class SecurityHeadersMiddleware:
    """Set conservative security headers unless a route already set them."""

    def __init__(self, app: ASGIApp, headers: dict[str, str] | None = None):
        self.app = app
        self.headers = headers or SECURITY_HEADERS

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_security_headers(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                for name, value in self.headers.items():
                    headers.setdefault(name, value)
            await send(message)

        await self.app(scope, receive, send_with_security_headers)


class RequestLoggingMiddleware:
    """Log method, path, status and latency for each request."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code = 500

        async def send_capturing_status(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_capturing_status)
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            request_logger.info(
                f"{scope['method']} {scope['path']} {status_code} {duration_ms}ms",
                extra={
                    "method": scope["method"],
                    "path": scope["path"],
                    "status_code": status_code,
                    "duration_ms": duration_ms,
                    "client": client_address(scope),
                },
            )
