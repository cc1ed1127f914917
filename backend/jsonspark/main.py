"""JsonSpark API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map JsonSparkError → structured JSON responses
    - The document store is built once in lifespan and shared through app.state;
      an injected store (tests, local tooling) skips Firebase entirely
    - Startup aborts with exit code 1 when any Firebase credential is missing

Design Decisions:
    - create_app factory plus module-level app: uvicorn imports jsonspark.main:app,
      tests build isolated apps with their own settings and store
    - Middleware order, outermost first: request logging, security headers, CORS,
      rate limit, body cap. CORS preflights answer before the limiter counts them
"""

import logging
from contextlib import asynccontextmanager

import firebase_admin
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jsonspark.api.error_handlers import register_error_handlers
from jsonspark.api.routes import documents, health
from jsonspark.config import Settings, get_settings
from jsonspark.core.repository_protocols import DocumentStore
from jsonspark.infrastructure.firestore_store import (
    build_firestore_store, initialize_firebase_app,
)
from jsonspark.infrastructure.http_policies import (
    BodySizeLimitMiddleware, RateLimitMiddleware, RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from jsonspark.infrastructure.observability import setup_logging
from jsonspark.infrastructure.rate_limiter import FixedWindowRateLimiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)

    firebase_app = None
    if app.state.store is None:
        missing = settings.missing_firebase_credentials()
        if missing:
            logger.critical(
                f"Missing required Firebase environment variables: {', '.join(missing)}",
            )
            raise SystemExit(1)
        try:
            firebase_app = initialize_firebase_app(settings)
        except ValueError as e:
            logger.critical(f"Firebase initialization error: {e}")
            raise SystemExit(1) from e
        app.state.firebase_app = firebase_app
        app.state.store = build_firestore_store(settings, firebase_app)

    logger.info(f"JsonSpark API started ({settings.environment})")
    yield
    logger.info("JsonSpark API shutting down")
    if firebase_app is not None:
        app.state.firebase_app = None
        firebase_admin.delete_app(firebase_app)


def create_app(
    settings: Settings | None = None, store: DocumentStore | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="JsonSpark API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.firebase_app = None

    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_bytes)
    app.add_middleware(
        RateLimitMiddleware,
        limiter=FixedWindowRateLimiter(
            settings.rate_limit_max_requests, settings.rate_limit_window_seconds,
        ),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health.router)
    app.include_router(documents.router)

    register_error_handlers(app, include_details=not settings.is_production)
    return app


app = create_app()
