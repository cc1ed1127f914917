"""Domain Types: the persisted ApiDocument and its listing projection.

Invariants:
    - Slug is the primary key and the public path segment
    - json_data holds the caller's JSON value unmodified (no envelope)
    - updated_at >= created_at for every document

Design Decisions:
    - Frozen dataclasses over ORM models: documents live in Firestore, not SQL
    - Wire names are camelCase (jsonData, createdAt); Python names are snake_case,
      translation happens only at the gateway and response boundaries
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, NewType


Slug = NewType("Slug", str)


@dataclass(frozen=True)
class ApiDocument:
    """A stored JSON document served back at /api/<slug>."""
    slug: Slug
    name: str
    json_data: Any
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ApiDocumentSummary:
    """Listing projection. json_data omitted to keep payloads small."""
    slug: Slug
    name: str
    created_at: datetime | None

    @property
    def endpoint(self) -> str:
        return f"/api/{self.slug}"
