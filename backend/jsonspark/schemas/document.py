"""Document Schemas: Pydantic models for the /api request and response bodies.

Invariants:
    - jsonData arrives as a string; parsing and slug format are checked in the
      route handler with core.validators, identically on every path
    - Missing fields are reported together as MISSING_FIELDS, not one by one
    - Wire names are camelCase via aliases

Design Decisions:
    - Request fields are Optional: presence is checked by the handler so that
      "missing" and "malformed" stay distinct 400 responses
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DocumentCreate(BaseModel):
    """POST /api/create body."""
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    json_data: str | None = Field(None, alias="jsonData")
    slug: str | None = None

    def missing_fields(self) -> list[str]:
        return [
            wire for wire, value in (
                ("name", self.name),
                ("jsonData", self.json_data),
                ("slug", self.slug),
            )
            if not value
        ]


class DocumentUpdate(BaseModel):
    """PUT /api/{slug} body."""
    model_config = ConfigDict(populate_by_name=True)

    json_data: str | None = Field(None, alias="jsonData")


class CreateResponse(BaseModel):
    success: bool = True
    endpoint: str
    message: str = "API Created"


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class EndpointSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    slug: str
    name: str
    created_at: datetime | None = Field(None, serialization_alias="createdAt")
    endpoint: str


class EndpointListResponse(BaseModel):
    count: int
    endpoints: list[EndpointSummary]
