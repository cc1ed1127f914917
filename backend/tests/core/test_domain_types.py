"""Domain Types: ApiDocument immutability and the summary endpoint path."""

import dataclasses
from datetime import datetime, timezone

import pytest

from jsonspark.core.domain_types import ApiDocument, ApiDocumentSummary, Slug


def test_summary_endpoint_uses_api_prefix():
    summary = ApiDocumentSummary(slug=Slug("widgets"), name="Widgets", created_at=None)
    assert summary.endpoint == "/api/widgets"


def test_documents_are_frozen():
    now = datetime.now(timezone.utc)
    doc = ApiDocument(
        slug=Slug("widgets"), name="Widgets", json_data={"a": 1},
        created_at=now, updated_at=now,
    )
    with pytest.raises(dataclasses.FrozenInstanceError):
        doc.name = "Other"
