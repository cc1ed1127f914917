"""Boundary Protocols: the contract between route handlers and the document store.

Invariants:
    - Handlers depend on DocumentStore only, never on firebase-admin types
    - create/update/delete are atomic per document; preconditions enforced by the store
    - Every store failure surfaces as a JsonSparkError subclass (core/errors.py)

Design Decisions:
    - Protocol over ABC: structural subtyping lets tests pass an in-memory store
    - Async methods: implementations do network IO on the event loop
"""

from typing import Any, Protocol

from jsonspark.core.domain_types import ApiDocument, ApiDocumentSummary


class DocumentStore(Protocol):
    """Contract for ApiDocument persistence, implemented by infrastructure."""

    async def get(self, slug: str) -> ApiDocument | None:
        """Return the document or None when absent."""
        ...

    async def create(self, slug: str, name: str, json_data: Any) -> None:
        """Persist a new document. Raises SlugConflictError if slug exists."""
        ...

    async def update(self, slug: str, json_data: Any) -> None:
        """Replace jsonData, bump updatedAt. Raises DocumentNotFoundError if absent."""
        ...

    async def delete(self, slug: str) -> None:
        """Hard delete. Raises DocumentNotFoundError if absent."""
        ...

    async def list(self) -> list[ApiDocumentSummary]:
        """All documents, newest first, without jsonData."""
        ...

    async def ping(self) -> bool:
        """Round-trip write/read to confirm connectivity."""
        ...
