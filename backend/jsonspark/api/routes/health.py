"""Health Checks: liveness and store round-trip endpoints.

Invariants:
    - GET /health/live always returns 200 if the process is up
    - GET /health returns 200 only after a Firestore write/read round-trip,
      500 with status ERROR otherwise
    - "firebase" reports whether lifespan initialized a firebase-admin app;
      an injected store leaves it false

Design Decisions:
    - Separate liveness from the store check: a Firestore outage should not make
      the orchestrator restart a healthy process
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from jsonspark.core.errors import JsonSparkError

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_check():
    """Process is up."""
    return {"status": "OK", "timestamp": _now()}


@router.get("")
async def health_check(request: Request):
    """Store round-trip: write then read the healthcheck document."""
    store = getattr(request.app.state, "store", None)
    settings = request.app.state.settings
    try:
        if store is None:
            raise RuntimeError("document store not initialized")
        database_ok = await store.ping()
    except (JsonSparkError, RuntimeError) as e:
        logger.error(f"Health check failed: {e}")
        content = {"status": "ERROR", "timestamp": _now()}
        if not settings.is_production:
            detail = getattr(getattr(e, "context", None), "debug_info", None)
            content["error"] = detail or str(e)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content,
        )
    return {
        "status": "OK",
        "firebase": getattr(request.app.state, "firebase_app", None) is not None,
        "database": database_ok,
        "timestamp": _now(),
    }
