"""Document Endpoints: create, read, update, delete and list JSON documents under /api.

Invariants:
    - Slug format checked with validate_slug on every path that takes a slug
    - jsonData checked with parse_json before any write
    - The store is never called with known-bad input
    - GET /api/{slug} returns the stored JSON value itself, no envelope

Design Decisions:
    - Handlers raise JsonSparkError subclasses; api/error_handlers.py renders them
    - /api prefix on every document route: keeps /health and /api/create from
      colliding with caller-chosen slugs
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from jsonspark.api.dependencies import get_store
from jsonspark.core.errors import (
    DocumentNotFoundError, InvalidJsonError, InvalidSlugError, MissingFieldsError,
)
from jsonspark.core.repository_protocols import DocumentStore
from jsonspark.core.validators import INVALID_JSON, parse_json, validate_slug
from jsonspark.schemas.document import (
    CreateResponse, DocumentCreate, DocumentUpdate, EndpointListResponse,
    EndpointSummary, MessageResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["documents"])


def _require_slug(slug: str) -> str:
    if not validate_slug(slug):
        raise InvalidSlugError(slug)
    return slug


def _require_json(text: str | None) -> Any:
    parsed = parse_json(text)
    if parsed is INVALID_JSON:
        raise InvalidJsonError()
    return parsed


@router.get("", response_model=EndpointListResponse)
async def list_documents(store: DocumentStore = Depends(get_store)):
    """List every document, newest first, without its JSON payload."""
    summaries = await store.list()
    return EndpointListResponse(
        count=len(summaries),
        endpoints=[
            EndpointSummary(
                slug=s.slug, name=s.name,
                created_at=s.created_at, endpoint=s.endpoint,
            )
            for s in summaries
        ],
    )


@router.post(
    "/create", response_model=CreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_document(
    body: DocumentCreate, store: DocumentStore = Depends(get_store),
):
    """Create a document. 409 if the slug is taken."""
    missing = body.missing_fields()
    if missing:
        raise MissingFieldsError(missing)
    slug = _require_slug(body.slug)
    parsed = _require_json(body.json_data)

    await store.create(slug, body.name, parsed)
    return CreateResponse(endpoint=f"/api/{slug}")


@router.get("/{slug}")
async def read_document(slug: str, store: DocumentStore = Depends(get_store)):
    """Serve the stored JSON value verbatim."""
    _require_slug(slug)
    document = await store.get(slug)
    if document is None:
        raise DocumentNotFoundError(slug)
    return JSONResponse(content=document.json_data)


@router.put("/{slug}", response_model=MessageResponse)
async def update_document(
    slug: str, body: DocumentUpdate, store: DocumentStore = Depends(get_store),
):
    """Replace the document's JSON and bump updatedAt."""
    _require_slug(slug)
    if not body.json_data:
        raise MissingFieldsError(["jsonData"])
    parsed = _require_json(body.json_data)

    await store.update(slug, parsed)
    return MessageResponse(message="API Updated")


@router.delete("/{slug}", response_model=MessageResponse)
async def delete_document(slug: str, store: DocumentStore = Depends(get_store)):
    """Hard delete. 404 if the slug does not exist."""
    _require_slug(slug)
    await store.delete(slug)
    return MessageResponse(message="API Deleted")
