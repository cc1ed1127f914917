"""Firestore Document Store: ApiDocument persistence on Cloud Firestore via firebase-admin.

Invariants:
    - create/update/delete rely on Firestore preconditions, never read-then-write
      (create fails with AlreadyExists, update and exists=True delete fail with NotFound)
    - createdAt/updatedAt always come from SERVER_TIMESTAMP
    - jsonData is persisted as canonical JSON text and decoded on read
    - Every google-api-core / google-auth failure is mapped to StoreError (core/errors.py)
    - Stored jsonData text that no longer parses surfaces as StoreError("decode")

Design Decisions:
    - jsonData as text: Firestore cannot hold nested arrays or ints beyond 64 bits,
      text storage keeps any JSON value byte-for-byte recoverable
    - Named firebase app per process: initialize_app with a unique name avoids clashing
      with a default app created by another library
    - Client injected into FirestoreDocumentStore: lifespan owns construction, tests
      pass a fake client
"""

import json
import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.api_core import exceptions as gcp_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import firestore

from jsonspark.config import Settings
from jsonspark.core.domain_types import ApiDocument, ApiDocumentSummary, Slug
from jsonspark.core.errors import (
    DocumentNotFoundError, SlugConflictError, StoreError,
)

logger = logging.getLogger(__name__)

_TOKEN_URI = "https://oauth2.googleapis.com/token"
_HEALTHCHECK_DOC = "test"
_SUMMARY_FIELDS = ["slug", "name", "createdAt"]


def initialize_firebase_app(settings: Settings) -> firebase_admin.App:
    """Build the firebase-admin app from service-account settings."""
    logger.info(
        f"Initializing Firebase: project={settings.firebase_project_id} "
        f"client_email={settings.firebase_client_email} "
        f"private_key_present={bool(settings.firebase_private_key)} "
        f"database_url={settings.firebase_database_url}",
    )
    cred = credentials.Certificate({
        "type": "service_account",
        "project_id": settings.firebase_project_id,
        "client_email": settings.firebase_client_email,
        "private_key": settings.firebase_private_key,
        "token_uri": _TOKEN_URI,
    })
    app = firebase_admin.initialize_app(
        cred,
        options={
            "databaseURL": settings.firebase_database_url,
            "projectId": settings.firebase_project_id,
        },
        name=f"jsonspark-{uuid.uuid4()}",
    )
    logger.info("Firebase Admin initialized")
    return app


def encode_json_data(value: Any) -> str:
    return json.dumps(
        value, ensure_ascii=False, allow_nan=False, separators=(",", ":"),
    )


def decode_json_data(raw: Any) -> Any:
    """Decode stored jsonData. Non-text values predate text storage and pass through."""
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except ValueError as e:
            raise StoreError("decode", e) from e
    return raw


@contextmanager
def _store_errors(
    operation: str, slug: str | None = None,
    conflict_on_exists: bool = False, missing_is_not_found: bool = False,
) -> Iterator[None]:
    """Map Firestore client exceptions to the JsonSpark error hierarchy."""
    try:
        yield
    except gcp_exceptions.AlreadyExists as e:
        if conflict_on_exists and slug is not None:
            raise SlugConflictError(slug) from e
        logger.error(f"Firestore {operation} failed: {e}", extra={"slug": slug})
        raise StoreError(operation, e) from e
    except gcp_exceptions.NotFound as e:
        if missing_is_not_found and slug is not None:
            raise DocumentNotFoundError(slug) from e
        logger.error(f"Firestore {operation} failed: {e}", extra={"slug": slug})
        raise StoreError(operation, e) from e
    except (gcp_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
        logger.error(f"Firestore {operation} failed: {e}", extra={"slug": slug})
        raise StoreError(operation, e) from e


class FirestoreDocumentStore:
    """DocumentStore backed by a google.cloud.firestore AsyncClient."""

    def __init__(
        self, client: Any, collection: str = "api",
        healthcheck_collection: str = "healthcheck",
    ):
        self._client = client
        self._documents = client.collection(collection)
        self._healthcheck = client.collection(healthcheck_collection)

    async def get(self, slug: str) -> ApiDocument | None:
        with _store_errors("get", slug):
            snapshot = await self._documents.document(slug).get()
        if not snapshot.exists:
            return None
        data = snapshot.to_dict() or {}
        try:
            json_data = decode_json_data(data.get("jsonData"))
        except StoreError:
            logger.error(f"Stored jsonData is not valid JSON: {slug}", extra={"slug": slug})
            raise
        return ApiDocument(
            slug=Slug(data.get("slug", slug)),
            name=data.get("name", ""),
            json_data=json_data,
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    async def create(self, slug: str, name: str, json_data: Any) -> None:
        with _store_errors("create", slug, conflict_on_exists=True):
            await self._documents.document(slug).create({
                "slug": slug,
                "name": name,
                "jsonData": encode_json_data(json_data),
                "createdAt": firestore.SERVER_TIMESTAMP,
                "updatedAt": firestore.SERVER_TIMESTAMP,
            })
        logger.info(f"Document created: {slug}", extra={"slug": slug})

    async def update(self, slug: str, json_data: Any) -> None:
        with _store_errors("update", slug, missing_is_not_found=True):
            await self._documents.document(slug).update({
                "jsonData": encode_json_data(json_data),
                "updatedAt": firestore.SERVER_TIMESTAMP,
            })
        logger.info(f"Document updated: {slug}", extra={"slug": slug})

    async def delete(self, slug: str) -> None:
        with _store_errors("delete", slug, missing_is_not_found=True):
            await self._documents.document(slug).delete(
                option=self._client.write_option(exists=True),
            )
        logger.info(f"Document deleted: {slug}", extra={"slug": slug})

    async def list(self) -> list[ApiDocumentSummary]:
        query = self._documents.select(_SUMMARY_FIELDS).order_by(
            "createdAt", direction=firestore.Query.DESCENDING,
        )
        summaries = []
        with _store_errors("list"):
            async for snapshot in query.stream():
                data = snapshot.to_dict() or {}
                summaries.append(ApiDocumentSummary(
                    slug=Slug(data.get("slug", snapshot.id)),
                    name=data.get("name", ""),
                    created_at=data.get("createdAt"),
                ))
        return summaries

    async def ping(self) -> bool:
        ref = self._healthcheck.document(_HEALTHCHECK_DOC)
        with _store_errors("ping"):
            await ref.set({"timestamp": datetime.now(timezone.utc).isoformat()})
            snapshot = await ref.get()
        return snapshot.exists


def build_firestore_store(settings: Settings, app: firebase_admin.App) -> FirestoreDocumentStore:
    return FirestoreDocumentStore(
        firestore_async.client(app),
        collection=settings.documents_collection,
        healthcheck_collection=settings.healthcheck_collection,
    )
